"""
Options header embedded at the top of generated files.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import jinja2

from .pipeline.config import GeneratorSettings
from .utils import join_namespace, normalize_qualified_name

CURRENT_DIR = Path(__file__).parent

OPTIONS_START = "#ODATATOOLSOPTIONS"
OPTIONS_END = "#ODATATOOLSOPTIONSEND"


def create_environment() -> jinja2.Environment:
    """Jinja environment with the name filters used by rendering backends."""
    env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True, undefined=jinja2.StrictUndefined)
    env.filters["join_namespace"] = join_namespace
    env.filters["normalize_qualified_name"] = normalize_qualified_name
    return env


def create_header(settings: GeneratorSettings, now: datetime | None = None, command: str = "") -> str:
    """
    Render the options header.

    Args:
        settings: Options to persist between the marker lines
        now: Creation time, defaults to the current time
        command: Command line that produced the file, if any

    Returns:
        The header comment block
    """
    env = create_environment()
    with open(CURRENT_DIR / "templates" / "header.jinja2") as f:
        template = env.from_string(f.read())
    created = (now or datetime.now()).strftime("%a %b %d %Y %H:%M:%S")
    return template.render(
        command=command,
        created=created,
        options=json.dumps(settings.to_dict(), indent="\t"),
    )
