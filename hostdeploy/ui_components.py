"""
hostdeploy - UI Components & Branding
Standardized headers and the closing summary
"""

from typing import Optional

from rich.console import Console

BRAND = "hostdeploy"

# Color scheme
BRAND_COLOR = "color(214)"
SUCCESS_COLOR = "green"
ERROR_COLOR = "red"


def _line(console: Console, text: str) -> None:
    console.print(f" [bold {BRAND_COLOR}]{BRAND}[/bold {BRAND_COLOR}] [dim]›[/dim] {text}")


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized hostdeploy command header.

    Args:
        title: Main title (e.g., "Deploy Application")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy Application",
            details={"Host": "203.0.113.10", "Branch": "main"}
        )
    """
    if console is None:
        console = Console()

    _line(console, f"[bold white]{title}[/bold white]")
    if subtitle:
        _line(console, f"[dim]{subtitle}[/dim]")
    if details:
        for key, value in details.items():
            if value:
                _line(console, f"{key}: [cyan]{value}[/cyan]")

    console.print()


def show_deploy_summary(summary, log_path, console: Optional[Console] = None):
    """Print the closing block of a successful deployment."""
    if console is None:
        console = Console()

    console.print()
    console.print(f"[{SUCCESS_COLOR}]✓ Deployment complete[/{SUCCESS_COLOR}]")
    if summary is not None:
        if summary.mode is not None:
            console.print(f"  [dim]Mode:[/dim] {summary.mode.value}")
        if summary.container_action:
            console.print(f"  [dim]Container:[/dim] {summary.container_action}")
        if summary.proxy_action:
            console.print(f"  [dim]Proxy rule:[/dim] {summary.proxy_action}")
        console.print(f"  [dim]Application:[/dim] [cyan]{summary.url}[/cyan]")
    console.print(f"\n[dim]Logs saved to:[/dim] {log_path}\n")


def show_failure(result, log_path, console: Optional[Console] = None):
    """Print the closing block of a failed run."""
    if console is None:
        console = Console()

    console.print()
    console.print(
        f"[{ERROR_COLOR}]✗ Failed at stage '{result.stage_name}' "
        f"(exit code {result.exit_code})[/{ERROR_COLOR}]"
    )
    console.print(f"\n[dim]Logs saved to:[/dim] {log_path}\n")
