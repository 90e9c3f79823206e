from conftest import make_entry
from services.csv_importer import parse_table
from services.report_service import (
    build_report, by_room, by_teacher, export_entries_csv, format_events,
)

ENTRIES = [
    make_entry(),
    make_entry(id="2", course_code="CSE203", section="2", teacher="Prof. Fatima Ali",
               start_time="11:00", end_time="12:30", room="202"),
    make_entry(id="3", course_code="CSE305", day="Wednesday", teacher="Dr. Khan",
               start_time="10:00", end_time="12:00", room="Lab-1", building="Building B"),
]


def test_by_teacher_counts():
    assert by_teacher(ENTRIES) == {"Dr. Khan": 2, "Prof. Fatima Ali": 1}


def test_by_room_keys_on_building_and_room():
    assert by_room(ENTRIES) == {"Building A 201": 1, "Building A 202": 1, "Building B Lab-1": 1}


def test_empty_reports():
    report = build_report([])
    assert report["total_entries"] == 0
    assert report["by_teacher"] == {}
    assert report["by_room"] == {}
    assert set(report["by_day"].values()) == {0}


def test_build_report_by_day():
    report = build_report(ENTRIES)
    assert report["total_entries"] == 3
    assert report["by_day"]["Monday"] == 2
    assert report["by_day"]["Wednesday"] == 1
    assert report["by_day"]["Friday"] == 0


def test_export_can_be_parsed_back():
    rows = parse_table(export_entries_csv(ENTRIES))

    assert [r["CourseCode"] for r in rows] == ["CSE201", "CSE203", "CSE305"]
    assert rows[2] == {
        "CourseCode": "CSE305", "Section": "1", "Day": "Wednesday", "StartTime": "10:00",
        "EndTime": "12:00", "Room": "Lab-1", "Building": "Building B", "Teacher": "Dr. Khan",
    }


def test_format_events_weekly_recurrence_and_filters():
    events = format_events(ENTRIES)
    assert len(events) == 3
    assert events[0]["daysOfWeek"] == [1]
    assert events[2]["daysOfWeek"] == [3]
    assert events[0]["startTime"] == "09:00"
    assert events[0]["title"] == "CSE201-1 (201)"

    assert [e["id"] for e in format_events(ENTRIES, teacher="Dr. Khan")] == ["1", "3"]
    assert [e["id"] for e in format_events(ENTRIES, room="202")] == ["2"]
