"""Jinja2 rendering for remote scripts and proxy rules."""

import shlex
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["shquote"] = lambda value: shlex.quote(str(value))
    return env


_environment = _build_environment()


def render_template(name: str, **context) -> str:
    """
    Render a template from the package templates directory.

    Args:
        name: Template path relative to templates/ (e.g. "remote/deploy.sh.j2")
        **context: Template variables

    Returns:
        Rendered text
    """
    return _environment.get_template(name).render(**context)
