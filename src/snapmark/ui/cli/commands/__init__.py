"""CLI command implementations exposed via `snapmark.ui.cli`."""

from __future__ import annotations

from .check import check
from .show import show


__all__ = ["check", "show"]
