#!/usr/bin/env python3
"""hostdeploy CLI - Main entry point"""

import functools
import os
import sys
from pathlib import Path

import rich_click as click
from click.exceptions import ClickException
from rich.console import Console

from hostdeploy import __version__
from hostdeploy.commands import CleanupCommand, DeployCommand, DeployOptions
from hostdeploy.constants import DEFAULT_LOG_DIR, DEFAULT_WORKDIR

# Configure rich-click help output
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_OPTIONS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            # Show traceback if DEBUG env var is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--repo", "repository_url", help="Git repository URL (https://, git@ or ssh://)")
@click.option("--branch", help="Branch to deploy [default: main]")
@click.option("--user", "ssh_user", help="Remote SSH username [default: ubuntu]")
@click.option("--host", "server_address", help="Remote server IPv4 address")
@click.option("--key", "ssh_key_path", help="Path to SSH private key [default: ~/.ssh/id_ed25519]")
@click.option("--port", "application_port", help="Application container port [default: 8080]")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML file with deployment parameters",
)
@click.option(
    "--workdir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_WORKDIR,
    show_default=True,
    help="Local directory for the working copy",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_LOG_DIR,
    show_default=True,
    help="Directory for per-run log files",
)
@click.option("--no-input", is_flag=True, help="Never prompt; fail on missing or invalid values")
@click.option("--cleanup", "-c", is_flag=True, help="Remove the deployed application instead of deploying")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.version_option(version=__version__, prog_name="hostdeploy")
@handle_cli_errors
def cli(
    repository_url,
    branch,
    ssh_user,
    server_address,
    ssh_key_path,
    application_port,
    config_file,
    workdir,
    log_dir,
    no_input,
    cleanup,
    verbose,
):
    """
    Deploy a containerized application to a single remote host.

    Clones the repository, prepares the host (Docker, Compose, Nginx),
    builds and starts the application, routes port 80 to it and validates
    the result. Re-running replaces the previous deployment.

    \b
    The repository access token is read from $HOSTDEPLOY_TOKEN or prompted
    (hidden); it is never stored or logged.

    \b
    Exit codes:
      0 success, 1 general, 2 invalid input, 3 connectivity,
      4 remote preparation, 5 deploy/build, 6 validation

    \b
    Examples:
      hostdeploy --repo https://github.com/acme/shop.git --host 203.0.113.10
      hostdeploy --config deploy.yml --no-input
      hostdeploy --cleanup --host 203.0.113.10
    """
    overrides = {
        "repository_url": repository_url,
        "branch": branch,
        "ssh_user": ssh_user,
        "server_address": server_address,
        "ssh_key_path": ssh_key_path,
        "application_port": application_port,
    }
    options = DeployOptions(
        overrides=overrides,
        config_file=config_file,
        workdir=workdir,
        interactive=not no_input,
    )
    command_cls = CleanupCommand if cleanup else DeployCommand
    command = command_cls(options, verbose=verbose, log_dir=log_dir)
    command.run()


def main():
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
