"""Jinja2 environment shared by the Markdown, summary, report and prompt renderers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(extra_dirs: Sequence[Path] = ()) -> Environment:
    directories = []
    for directory in (*extra_dirs, TEMPLATES_DIR):
        if str(directory) not in directories:
            directories.append(str(directory))
    loader = FileSystemLoader(directories)
    env = Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["percent"] = percent
    return env


def percent(value: float) -> str:
    """Render a [0, 1] ratio as a whole percentage, e.g. ``0.856 -> "86"``."""
    return f"{value * 100:.0f}"


@lru_cache(maxsize=1)
def default_environment() -> Environment:
    return create_environment()


def render_template(name: str, **context: Any) -> str:
    return default_environment().get_template(name).render(**context)


__all__ = ["TEMPLATES_DIR", "create_environment", "default_environment", "percent", "render_template"]
