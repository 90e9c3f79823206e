"""
시간표 집계 리포트 및 캘린더 이벤트 포맷 변환 서비스
"""
import csv
import io
from collections import defaultdict

from services.csv_importer import COLUMNS, TEMPLATE_HEADERS
from services.slot_grid import DAYS, sort_entries

# FullCalendar daysOfWeek (0=일요일)
WEEKDAY_NUMBERS = {day: index for index, day in enumerate(DAYS, start=1)}


def by_teacher(entries):
    """교수별 수업 수"""
    counts = defaultdict(int)
    for e in entries:
        counts[e.get('teacher', '')] += 1
    return dict(counts)


def by_room(entries):
    """'건물 강의실' 별 수업 수"""
    counts = defaultdict(int)
    for e in entries:
        counts[f"{e.get('building', '')} {e.get('room', '')}"] += 1
    return dict(counts)


def by_day(entries, days=DAYS):
    counts = {day: 0 for day in days}
    for e in entries:
        day = e.get('day')
        counts[day] = counts.get(day, 0) + 1
    return counts


def build_report(entries, days=DAYS):
    return {
        "total_entries": len(entries),
        "by_teacher": by_teacher(entries),
        "by_room": by_room(entries),
        "by_day": by_day(entries, days),
    }


def export_entries_csv(entries, days=DAYS):
    """업로드 템플릿과 같은 헤더로 CSV 내보내기 (재업로드 가능)"""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(TEMPLATE_HEADERS)
    for e in sort_entries(entries, days):
        writer.writerow([e.get(field, '') for field, _ in COLUMNS])
    return buf.getvalue()


def format_events(entries, teacher=None, room=None):
    """일정을 FullCalendar 주간 반복 이벤트 JSON 포맷으로 변환"""
    events = []

    for entry in entries:
        if teacher and entry.get('teacher') != teacher:
            continue
        if room and entry.get('room') != room:
            continue

        weekday = WEEKDAY_NUMBERS.get(entry.get('day'))
        if weekday is None:
            continue

        label = f"{entry.get('course_code', '')}-{entry.get('section', '')}"
        events.append({
            "id": entry.get('id', ''),
            "title": f"{label} ({entry.get('room', '')})",
            "daysOfWeek": [weekday],
            "startTime": entry.get('start_time', '09:00'),
            "endTime": entry.get('end_time', '10:30'),
            "color": entry.get('color') or '#2563EB',
            "textColor": "#ffffff",
            "extendedProps": {
                "entry_id": entry.get('id', ''),
                "course_code": entry.get('course_code', ''),
                "section": entry.get('section', ''),
                "teacher": entry.get('teacher', ''),
                "room": entry.get('room', ''),
                "building": entry.get('building', ''),
            }
        })

    return events
