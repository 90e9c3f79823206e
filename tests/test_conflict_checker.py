from conftest import make_entry
from services.conflict_checker import check_batch, check_conflicts


def candidate(**overrides):
    c = make_entry(**overrides)
    c.pop("id")
    return c


def kinds(issues):
    return [i.kind for i in issues]


def test_room_overlap_reports_room_conflict():
    existing = [make_entry()]
    c = candidate(course_code="CSE203", teacher="Dr. Ali", start_time="10:00", end_time="11:00")

    issues = check_conflicts(c, existing)

    assert kinds(issues) == ["room"]
    assert issues[0].entry_id == "1"
    assert issues[0].message == "Room conflict with CSE201-1 (09:00-10:30)."


def test_teacher_overlap_reports_teacher_conflict():
    existing = [make_entry()]
    c = candidate(room="202", start_time="10:00", end_time="11:00")

    issues = check_conflicts(c, existing)

    assert kinds(issues) == ["teacher"]
    assert issues[0].message == "Teacher conflict with CSE201-1 (09:00-10:30)."


def test_gap_violation_without_overlap():
    existing = [make_entry()]
    c = candidate(room="202", start_time="10:35", end_time="11:30")

    issues = check_conflicts(c, existing)

    assert kinds(issues) == ["gap"]
    assert issues[0].message == "Minimum 15-minute gap violated with CSE201-1."


def test_gap_of_exactly_fifteen_minutes_is_allowed():
    existing = [make_entry()]
    c = candidate(start_time="10:45", end_time="11:45")

    assert check_conflicts(c, existing) == []


def test_gap_rule_fires_alongside_overlap():
    existing = [make_entry()]
    # 10:20 시작: 겹치고, 종료(10:30)와의 간격 10분
    c = candidate(start_time="10:20", end_time="11:00")

    assert kinds(check_conflicts(c, existing)) == ["room", "teacher", "gap"]


def test_duration_cap_regardless_of_existing():
    c = candidate(start_time="09:00", end_time="13:00", room="301", teacher="Nobody")

    issues = check_conflicts(c, [])

    assert kinds(issues) == ["duration"]
    assert issues[0].message == "Duration exceeds 3 hours."
    assert issues[0].entry_id is None


def test_exactly_three_hours_is_allowed():
    c = candidate(start_time="09:00", end_time="12:00")
    assert check_conflicts(c, []) == []


def test_other_days_and_unrelated_rooms_are_ignored():
    existing = [make_entry(day="Tuesday"), make_entry(id="2", room="301", teacher="Dr. Rahman")]
    c = candidate(start_time="09:00", end_time="10:30")

    assert check_conflicts(c, existing) == []


def test_exclude_id_skips_entry_being_edited():
    existing = [make_entry(), make_entry(id="2", room="202", teacher="Dr. Ali", start_time="11:00", end_time="12:00")]
    c = candidate(start_time="09:30", end_time="10:30")

    assert check_conflicts(c, existing, exclude_id="1") == []
    assert "1" in [i.entry_id for i in check_conflicts(c, existing)]


def test_identical_inputs_give_identical_results():
    existing = [make_entry(), make_entry(id="2", room="202", start_time="10:40", end_time="11:30")]
    c = candidate(start_time="10:00", end_time="11:00")

    first = [i.to_dict() for i in check_conflicts(c, existing)]
    second = [i.to_dict() for i in check_conflicts(c, existing)]

    assert first == second
    assert first


def test_custom_limits():
    c = candidate(start_time="09:00", end_time="11:00")
    issues = check_conflicts(c, [], max_duration=60)
    assert issues[0].message == "Duration exceeds 1 hours."


def test_batch_rows_are_not_checked_against_each_other():
    existing = [make_entry(day="Friday")]
    rows = [
        candidate(course_code="CSE301", start_time="09:00", end_time="10:00"),
        candidate(course_code="CSE302", start_time="09:30", end_time="10:30"),
    ]

    assert check_batch(rows, existing) == []


def test_batch_reports_rows_conflicting_with_existing():
    existing = [make_entry()]
    rows = [
        candidate(day="Tuesday"),
        candidate(teacher="Dr. Ali", start_time="10:00", end_time="11:00"),
    ]

    result = check_batch(rows, existing)

    assert [r["row"] for r in result] == [2]
    assert kinds(result[0]["issues"]) == ["room"]
