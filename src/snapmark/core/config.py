"""Configuration model consumed by the snapshot store and inline matcher.

SnapshotOptions

`update_snapshots` (`bool`)
: Treat every stored snapshot as stale. Lookups return nothing so each test
  records its output again, and inline snapshots are rewritten on mismatch.

`freeze_snapshots` (`bool`)
: Forbid rewriting inline snapshots. Typically enabled on CI so drifting
  snapshots fail instead of being silently updated.

`update_command` (`str`)
: Command quoted in the header of generated snapshot files. The `{path}`
  placeholder receives the test file path relative to `root_dir`.

`root_dir` (`Path | None`)
: Directory used to relativise test paths in generated headers. Defaults to
  the current working directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


SNAPSHOT_EXT = ".test.md"
DEFAULT_UPDATE_COMMAND = "pytest {path} --update-snapshots"


class SnapshotOptions(BaseModel):
    """Run-scoped flags controlling snapshot reconciliation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    update_snapshots: bool = False
    freeze_snapshots: bool = False
    update_command: str = DEFAULT_UPDATE_COMMAND
    root_dir: Path | None = None

    @field_validator("update_command")
    @classmethod
    def require_path_placeholder(cls, value: str) -> str:
        """Ensure the header command can mention the test file."""
        if "{path}" not in value:
            raise ValueError("update_command must contain a '{path}' placeholder")
        try:
            value.format(path="tests/test_example.py")
        except (KeyError, IndexError, AttributeError, ValueError) as exc:
            raise ValueError(
                "update_command may only use the '{path}' placeholder "
                f"(double braces to keep them literally): {exc!r}"
            ) from exc
        return value

    def relative_to_root(self, path: Path) -> Path:
        """Return ``path`` relative to the configured root when possible."""
        root = (self.root_dir or Path.cwd()).resolve()
        try:
            return path.resolve().relative_to(root)
        except ValueError:
            return path


__all__ = ["DEFAULT_UPDATE_COMMAND", "SNAPSHOT_EXT", "SnapshotOptions"]
