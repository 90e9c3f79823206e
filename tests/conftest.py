import pytest

from app import create_app
from services.routine_storage import LocalJsonStorage


def make_entry(**overrides):
    entry = {
        "id": "1",
        "course_code": "CSE201",
        "section": "1",
        "teacher": "Dr. Khan",
        "day": "Monday",
        "start_time": "09:00",
        "end_time": "10:30",
        "room": "201",
        "building": "Building A",
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def storage(tmp_path):
    return LocalJsonStorage(str(tmp_path / "data" / "routines.json"))


@pytest.fixture
def app(tmp_path, storage):
    app = create_app(
        {
            "TESTING": True,
            "DATA_DIR": str(tmp_path / "data"),
            "LOG_DIR": str(tmp_path / "logs"),
        },
        storage=storage,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(storage):
    """기본 일정 1건 (월 09:00-10:30, 201호, Dr. Khan)"""
    entry = make_entry()
    entry.pop("id")
    storage.create_entry(entry)
    return entry
