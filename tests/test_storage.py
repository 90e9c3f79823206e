import json

from conftest import make_entry
from services.routine_storage import LocalJsonStorage


def new_entry(**overrides):
    entry = make_entry(**overrides)
    entry.pop("id")
    return entry


def test_create_and_get(storage):
    entry_id = storage.create_entry(new_entry())

    assert entry_id.startswith("entry_")
    assert storage.get_entry(entry_id)["course_code"] == "CSE201"
    assert storage.get_entry("missing") is None
    assert storage.count_entries() == 1


def test_list_filters(storage):
    storage.create_entry(new_entry())
    storage.create_entry(new_entry(day="Tuesday", teacher="Dr. Ali"))

    assert len(storage.list_entries()) == 2
    assert [e["teacher"] for e in storage.list_entries({"day": "Tuesday"})] == ["Dr. Ali"]
    # 알 수 없는 필터와 빈 값은 무시
    assert len(storage.list_entries({"color": "#000000", "room": ""})) == 2


def test_create_entries_single_write(storage):
    ids = storage.create_entries([new_entry(), new_entry(day="Friday")])

    assert len(ids) == 2
    assert {e["id"] for e in storage.list_entries()} == set(ids)


def test_update_keeps_id(storage):
    entry_id = storage.create_entry(new_entry())

    assert storage.update_entry(entry_id, {"room": "301", "id": "hijack"})
    assert storage.get_entry(entry_id)["room"] == "301"
    assert not storage.update_entry("missing", {"room": "301"})


def test_delete(storage):
    entry_id = storage.create_entry(new_entry())

    assert storage.delete_entry(entry_id)
    assert not storage.delete_entry(entry_id)
    assert storage.list_entries() == []


def test_entries_without_ids_are_migrated(tmp_path):
    path = tmp_path / "routines.json"
    path.write_text(json.dumps({"entries": [new_entry()]}), encoding="utf-8")

    storage = LocalJsonStorage(str(path))
    entries = storage.list_entries()

    assert entries[0]["id"].startswith("entry_")
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["entries"][0]["id"] == entries[0]["id"]
