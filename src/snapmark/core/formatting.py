"""Canonical display strings for received and expected snapshot values."""

from __future__ import annotations

from typing import Any, Final

from rich.pretty import pretty_repr


class _Missing:
    """Sentinel for an inline snapshot that has never been recorded."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def format_value(value: Any) -> str:
    """Return the text compared against a snapshot.

    Strings are used verbatim, every other value goes through Rich's
    structural pretty printer so containers render one item per line once
    they grow past the width limit.
    """
    if isinstance(value, str):
        return value
    return pretty_repr(value, max_width=80)


__all__ = ["MISSING", "format_value"]
