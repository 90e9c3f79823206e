"""
수업 일정 입력 검증 및 폼 필드 정의
"""
import re

# 입력 검증 패턴
TIME_RE = re.compile(r'^(\d{1,2}):([0-5]\d)$')

ENTRY_FIELDS = (
    'course_code', 'section', 'teacher', 'day',
    'start_time', 'end_time', 'room', 'building',
)
REQUIRED_FIELDS = ('course_code', 'section', 'teacher', 'day', 'start_time', 'end_time', 'room')


def normalize_time(value):
    """'9:00' → '09:00', 형식이 틀리면 None"""
    if not isinstance(value, str):
        return None
    m = TIME_RE.match(value.strip())
    if not m:
        return None
    hour = int(m.group(1))
    if hour > 23:
        return None
    return f"{hour:02d}:{m.group(2)}"


def time_to_minutes(value):
    """'HH:MM' → 자정 기준 분"""
    h, m = map(int, value.split(':'))
    return h * 60 + m


# 필드별 최대 길이 (폼 디스크립터와 검증이 같은 값을 사용)
MAX_LENGTHS = {
    'course_code': 20,
    'section': 10,
    'teacher': 100,
    'day': 20,
    'start_time': 5,
    'end_time': 5,
    'room': 30,
    'building': 50,
}


def _sanitize(value):
    if value is None:
        return ''
    return str(value).strip()


def entry_form_fields(config):
    """폼 렌더러용 필드 디스크립터 목록"""
    return [
        {"name": "course_code", "label": "Course Code", "type": "text", "required": True,
         "validation": {"maxLength": MAX_LENGTHS['course_code']}},
        {"name": "section", "label": "Section", "type": "select", "required": True,
         "options": list(config['SECTIONS'])},
        {"name": "teacher", "label": "Teacher", "type": "text", "required": True,
         "validation": {"maxLength": MAX_LENGTHS['teacher']}},
        {"name": "day", "label": "Day", "type": "select", "required": True,
         "options": list(config['DAYS'])},
        {"name": "start_time", "label": "Start Time", "type": "time", "required": True},
        {"name": "end_time", "label": "End Time", "type": "time", "required": True,
         "validation": {"after": "start_time"}},
        {"name": "room", "label": "Room", "type": "select", "required": True,
         "options": list(config['ROOMS'])},
        {"name": "building", "label": "Building", "type": "text", "required": False},
    ]


def validate_entry(data, days):
    """
    폼/업로드 입력을 정규화된 일정 dict로 변환.
    필드별 오류가 있으면 (None, errors) 반환.
    """
    errors = {}
    entry = {}

    for name in ENTRY_FIELDS:
        entry[name] = _sanitize(data.get(name))
        if len(entry[name]) > MAX_LENGTHS[name]:
            errors[name] = f"Must be at most {MAX_LENGTHS[name]} characters."

    for name in REQUIRED_FIELDS:
        if not entry[name] and name not in errors:
            errors[name] = "This field is required."

    entry['course_code'] = entry['course_code'].upper()

    if entry['day'] and 'day' not in errors and entry['day'] not in days:
        errors['day'] = f"Day must be one of: {', '.join(days)}."

    for name in ('start_time', 'end_time'):
        if entry[name] and name not in errors:
            normalized = normalize_time(entry[name])
            if normalized is None:
                errors[name] = "Time must be in HH:MM format."
            else:
                entry[name] = normalized

    if 'start_time' not in errors and 'end_time' not in errors:
        if time_to_minutes(entry['end_time']) <= time_to_minutes(entry['start_time']):
            errors['end_time'] = "End time must be after start time."

    if errors:
        return None, errors
    return entry, {}
