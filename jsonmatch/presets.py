"""Ready-made option sets for console and HTML output."""

from __future__ import annotations

from .exceptions import ConfigError
from .models import DiffOptions, Tag


def console_options() -> DiffOptions:
    """Options using ANSI foreground colours to highlight changes."""
    return DiffOptions(
        added=Tag("\033[0;32m", "\033[0m"),
        removed=Tag("\033[0;31m", "\033[0m"),
        changed=Tag("\033[0;33m", "\033[0m"),
        indent="    ",
    )


def html_options() -> DiffOptions:
    """Options using background-coloured spans. Works best inside <pre>."""
    return DiffOptions(
        added=Tag('<span style="background-color: #8bff7f">', '</span>'),
        removed=Tag('<span style="background-color: #fd7f7f">', '</span>'),
        changed=Tag('<span style="background-color: #fcff7f">', '</span>'),
        indent="    ",
    )


PRESETS = {
    "console": console_options,
    "html": html_options,
}


def get_preset(name: str) -> DiffOptions:
    try:
        return PRESETS[name]()
    except KeyError:
        raise ConfigError(f"Unknown preset: {name}", {"available": sorted(PRESETS)})
