from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from snapmark.adapters.markdown import parse_snapshot
from snapmark.core.config import SnapshotOptions
from snapmark.core.diagnostics import SNAPSHOT_DISCOVERY, SNAPSHOT_ENTRY, RecordingEmitter
from snapmark.core.exceptions import SnapshotParseError
from snapmark.core.store import SnapshotStore


SNAPSHOT = """# `test_sample.test.md`

**DO NOT MODIFY**. This file has been autogenerated. Run `pytest test_sample.py --update-snapshots` to update.

## `first`

```
one
```

## `second`

### `1`

```text
two
```

### `2`

```text
three
```
"""


@pytest.fixture
def test_file(tmp_path: Path) -> Path:
    path = tmp_path / "test_sample.py"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


def _store(test_file: Path, emitter: RecordingEmitter, **options) -> SnapshotStore:
    return SnapshotStore(
        test_file,
        options=SnapshotOptions(root_dir=test_file.parent, **options),
        emitter=emitter,
    )


def test_default_snapshot_path_sits_next_to_test(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)

    assert store.default_snapshot_path == test_file.parent.resolve() / "test_sample.test.md"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("custom", "custom.test.md"),
        ("custom.test.md", "custom.test.md"),
        ("custom.md", "custom.md.test.md"),
        ("nested/deep", "nested/deep.test.md"),
    ],
)
def test_normalize_snapshot_path(test_file: Path, emitter, filename: str, expected: str) -> None:
    store = _store(test_file, emitter)

    assert store.normalize_snapshot_path(filename) == test_file.parent.resolve() / expected


def test_get_missing_file_returns_none(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)

    assert asyncio.run(store.get("first", "0")) is None
    assert dict(store.snapshots) == {}
    assert emitter.events == []


def test_get_returns_values_and_marks_entries_used(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    async def scenario() -> list[str | None]:
        return [
            await store.get("first", "0"),
            await store.get("second", "2"),
            await store.get("second", "2"),
            await store.get("second", "missing"),
        ]

    assert asyncio.run(scenario()) == ["one", "three", "three", None]

    document = store.snapshots[store.default_snapshot_path]
    assert document.raw == SNAPSHOT
    assert {key: entry.used for key, entry in document.entries.items()} == {
        "first#0": True,
        "second#1": False,
        "second#2": True,
    }
    assert emitter.payloads(SNAPSHOT_DISCOVERY) == [{"path": store.default_snapshot_path}]
    touched = [payload["entry"].entry_name for payload in emitter.payloads(SNAPSHOT_ENTRY)]
    assert touched == ["0", "2"]


def test_get_in_update_mode_returns_none(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter, update_snapshots=True)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    assert asyncio.run(store.get("first", "0")) is None
    entry = store.snapshots[store.default_snapshot_path].entries["first#0"]
    assert entry.used is False
    assert emitter.payloads(SNAPSHOT_ENTRY) == []


def test_get_uses_alternate_filename(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    (test_file.parent / "other.test.md").write_text("## `t`\n\n```\nalt\n```\n", encoding="utf-8")

    assert asyncio.run(store.get("t", "0", "other")) == "alt"


def test_init_loads_default_snapshot(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    asyncio.run(store.init())

    assert store.get_raw_snapshot(store.default_snapshot_path) == SNAPSHOT


def test_get_raw_snapshot_requires_cached_document(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)

    with pytest.raises(KeyError):
        store.get_raw_snapshot(store.default_snapshot_path)


def test_set_creates_document_for_new_file(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)

    store.set("fresh", "0", "value", language="txt")

    document = store.snapshots[store.default_snapshot_path]
    assert document.raw == ""
    entry = document.entries["fresh#0"]
    assert (entry.value, entry.language, entry.used) == ("value", "txt", True)
    assert emitter.payloads(SNAPSHOT_ENTRY) == [
        {"path": store.default_snapshot_path, "entry": entry}
    ]


def test_set_overrides_loaded_value(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    async def scenario() -> str | None:
        await store.init()
        store.set("first", "0", "replaced")
        return await store.get("first", "0")

    assert asyncio.run(scenario()) == "replaced"


def test_parse_error_is_raised_and_not_cached(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text("# title\n\n## test\n\n### entry\n", encoding="utf-8")

    with pytest.raises(SnapshotParseError) as excinfo:
        asyncio.run(store.get("test", "entry"))

    assert excinfo.value.path == store.default_snapshot_path
    assert dict(store.snapshots) == {}
    assert emitter.payloads(SNAPSHOT_DISCOVERY) == []


def test_parse_error_does_not_affect_other_documents(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")
    (test_file.parent / "broken.test.md").write_text("## t\n\n### e\n", encoding="utf-8")

    async def scenario() -> str | None:
        with pytest.raises(SnapshotParseError):
            await store.get("t", "e", "broken")
        return await store.get("first", "0")

    assert asyncio.run(scenario()) == "one"


def test_concurrent_first_loads_parse_once(test_file: Path, emitter) -> None:
    calls: list[Path] = []

    def counting_parser(path: Path, text: str):
        calls.append(path)
        return parse_snapshot(path, text)

    store = SnapshotStore(test_file, emitter=emitter, parser=counting_parser)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    async def scenario() -> list[str | None]:
        return await asyncio.gather(*(store.get("first", "0") for _ in range(10)))

    assert asyncio.run(scenario()) == ["one"] * 10
    assert calls == [store.default_snapshot_path]
    assert len(emitter.payloads(SNAPSHOT_DISCOVERY)) == 1
    assert len(emitter.payloads(SNAPSHOT_ENTRY)) == 1


def test_render_keeps_only_used_entries(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    async def scenario() -> None:
        await store.get("first", "0")
        await store.get("second", "1")
        await store.get("second", "2")

    asyncio.run(scenario())

    assert store.render(store.default_snapshot_path) == SNAPSHOT
    assert list(store.iter_changed()) == []


def test_iter_changed_reports_pruned_and_new_documents(test_file: Path, emitter) -> None:
    store = _store(test_file, emitter)
    store.default_snapshot_path.write_text(SNAPSHOT, encoding="utf-8")

    async def scenario() -> None:
        await store.get("first", "0")
        store.set("extra", "0", "new", filename="extra")

    asyncio.run(scenario())

    changed = dict(store.iter_changed())
    assert set(changed) == {
        store.default_snapshot_path,
        store.normalize_snapshot_path("extra"),
    }
    assert "second" not in changed[store.default_snapshot_path]
    assert changed[store.normalize_snapshot_path("extra")].endswith(
        "## `extra`\n\n```\nnew\n```\n"
    )
