from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from snapmark.core.config import DEFAULT_UPDATE_COMMAND, SnapshotOptions


def test_defaults() -> None:
    options = SnapshotOptions()

    assert options.update_snapshots is False
    assert options.freeze_snapshots is False
    assert options.update_command == DEFAULT_UPDATE_COMMAND
    assert options.root_dir is None


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ValidationError):
        SnapshotOptions(update_snapshot=True)


def test_update_command_requires_placeholder() -> None:
    with pytest.raises(ValidationError, match="placeholder"):
        SnapshotOptions(update_command="pytest --update-snapshots")


@pytest.mark.parametrize(
    "command",
    [
        "pytest {path} -k '{name}'",
        "pytest {path.stem}",
        "pytest {path} {0}",
        "f(){ run; } && pytest {path}",
        "pytest {path!z}",
        "pytest {path} }",
    ],
)
def test_update_command_rejects_other_fields(command: str) -> None:
    with pytest.raises(ValidationError, match="placeholder"):
        SnapshotOptions(update_command=command)


def test_update_command_accepts_escaped_braces() -> None:
    options = SnapshotOptions(update_command="f(){{ pytest {path}; }}; f")

    assert options.update_command.format(path="t.py") == "f(){ pytest t.py; }; f"


def test_options_are_immutable() -> None:
    options = SnapshotOptions()

    with pytest.raises(ValidationError):
        options.update_snapshots = True


def test_relative_to_root(tmp_path: Path) -> None:
    options = SnapshotOptions(root_dir=tmp_path)

    assert options.relative_to_root(tmp_path / "tests" / "test_a.py") == Path("tests/test_a.py")


def test_relative_to_root_outside_root(tmp_path: Path) -> None:
    options = SnapshotOptions(root_dir=tmp_path / "project")
    outside = tmp_path / "elsewhere" / "test_b.py"

    assert options.relative_to_root(outside) == outside
