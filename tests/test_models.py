from models import ConflictIssue, ScheduleEntry


def test_from_dict_ignores_storage_fields():
    doc = {
        "id": "entry_1", "type": "entry", "_etag": "x",
        "course_code": "CSE201", "section": "A", "teacher": "Dr. Khan",
        "day": "Monday", "start_time": "09:00", "end_time": "10:30",
    }

    entry = ScheduleEntry.from_dict(doc)

    assert entry.label == "CSE201-A"
    assert entry.room == "201"
    assert entry.to_dict()["id"] == "entry_1"
    assert "type" not in entry.to_dict()


def test_to_dict_omits_empty_id():
    entry = ScheduleEntry("CSE201", "A", "Dr. Khan", "Monday", "09:00", "10:30")
    assert "id" not in entry.to_dict()


def test_conflict_issue_to_dict():
    issue = ConflictIssue(kind="duration", message="Duration exceeds 3 hours.")
    assert issue.to_dict() == {"kind": "duration", "message": "Duration exceeds 3 hours.", "entry_id": None}
