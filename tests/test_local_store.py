from __future__ import annotations

import orjson
import pytest

from productivity_hub.data import LocalSlotStorage
from productivity_hub.domain import LOCAL_OWNER, StorageMode, StudySpot, Task


def _slot_path(context, slot):
    return context.settings.local.data_dir / f"{slot}.json"


def test_starts_empty_in_local_mode(local_context):
    assert local_context.tasks.list() == []
    assert local_context.tasks.mode is StorageMode.LOCAL


@pytest.mark.parametrize(
    "steps, expected",
    [
        ([], []),
        ([("add", "a")], ["a"]),
        ([("add", "a"), ("remove", "a")], []),
        ([("add", "a"), ("add", "b"), ("remove", "b")], ["a"]),
        ([("add", "a"), ("add", "b"), ("add", "c"), ("remove", "b"), ("toggle", "a")], ["c", "a"]),
        ([("add", "a"), ("add", "b"), ("remove", "a"), ("remove", "b"), ("add", "c")], ["c"]),
    ],
)
def test_snapshot_matches_collection_after_every_mutation(local_context, steps, expected):
    store = local_context.tasks
    local = local_context.local
    ids = {}

    for action, text in steps:
        if action == "add":
            ids[text] = store.add(Task(text=text)).id
        elif action == "remove":
            assert store.remove(ids[text]) is True
        else:
            local_context.todo.toggle_task(ids[text])
        assert local.read(store.slot) == [task.to_record() for task in store.list()]

    assert [task.text for task in store.list()] == expected
    if not steps:
        assert not local.exists(store.slot)


def test_local_records_get_ids_owner_and_timestamps(local_context):
    task = local_context.tasks.add(Task(text="Read chapter 3"))

    assert task.id
    assert task.user_id == LOCAL_OWNER
    assert task.created_at is not None
    assert task.updated_at == task.created_at


def test_tasks_are_newest_first_and_spots_keep_insertion_order(local_context):
    for text in ("a", "b", "c"):
        local_context.tasks.add(Task(text=text))
    for name in ("Library", "Cafe"):
        local_context.spots.add(StudySpot(name=name))

    assert [task.text for task in local_context.tasks.list()] == ["c", "b", "a"]
    assert [spot.name for spot in local_context.spots.list()] == ["Library", "Cafe"]


def test_collection_survives_a_fresh_store(local_context, settings):
    local_context.tasks.add(Task(text="Persist me"))

    reopened = LocalSlotStorage(settings.local.data_dir)
    raw = reopened.read(settings.local.tasks_slot)
    assert [Task.from_record(item).text for item in raw] == ["Persist me"]


@pytest.mark.parametrize("payload", [b"{not json", b'{"text": "not a list"}', b'[{"missing": "fields"}]'])
def test_corrupt_snapshot_loads_as_empty_and_stays_usable(local_context, payload):
    path = _slot_path(local_context, local_context.tasks.slot)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)

    assert local_context.tasks.reload() == []

    added = local_context.tasks.add(Task(text="Fresh start"))
    assert local_context.tasks.list() == [added]
    assert orjson.loads(path.read_bytes()) == [added.to_record()]


def test_remove_and_update_of_unknown_ids_touch_nothing(local_context):
    store = local_context.tasks

    assert store.remove("missing") is False
    assert store.update(Task(text="ghost", id="missing")) is None
    assert not local_context.local.exists(store.slot)


def test_invalid_slot_names_are_rejected(tmp_path):
    with pytest.raises(ValueError):
        LocalSlotStorage(tmp_path).read("../escape")
