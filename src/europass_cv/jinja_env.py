"""
Jinja2 environment configuration for Europass CV.

Provides:
- The shared HTML environment (autoescaping on, templates from package data)
- Custom filters for HTML escaping and newline handling
- The embedded stylesheet, read once per process
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STYLESHEET_PATH = PACKAGE_DIR / "static" / "europass.css"


def html_escape(s: Any) -> Markup:
    """
    Escape HTML special characters in plain text.

    Rewrites ``&``, ``<``, ``>``, ``"`` and ``'`` to entities. Values that
    are already :class:`Markup` pass through untouched, so nothing is
    escaped twice.
    """
    if s is None:
        return Markup("")
    return escape(s)


def nl2br(s: Any) -> Markup:
    """
    Escape text, then turn newlines into ``<br>``.

    Escaping happens first; escaping after inserting the break tags would
    turn them into literal text.
    """
    if s is None:
        return Markup("")
    text = str(s).replace("\r\n", "\n").replace("\r", "\n")
    return Markup("<br>").join(html_escape(line) for line in text.split("\n"))


@lru_cache(maxsize=None)
def load_stylesheet() -> str:
    """
    Return the CSS embedded in every document.

    Read from package data on first use and kept for the life of the process.
    """
    logger.debug(f"Loading stylesheet from {STYLESHEET_PATH}")
    return STYLESHEET_PATH.read_text(encoding="utf-8")


@lru_cache(maxsize=None)
def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for HTML rendering.

    The environment holds no per-document state, so one instance is shared
    by every render call.

    Returns:
        Configured Jinja2 Environment.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )

    env.filters["html_escape"] = html_escape
    env.filters["nl2br"] = nl2br

    logger.debug(f"Created Jinja2 environment for templates in {TEMPLATES_DIR}")
    return env
