"""
주간 시간표 충돌 검사 - 강의실/교수 중복, 최소 간격, 최대 수업 시간
"""
from models import ConflictIssue
from utils.validators import time_to_minutes

MAX_DURATION_MINUTES = 180
MIN_GAP_MINUTES = 15


def check_conflicts(candidate, existing_entries, exclude_id=None,
                    max_duration=MAX_DURATION_MINUTES, min_gap=MIN_GAP_MINUTES):
    """
    후보 배치를 기존 배치 목록과 비교해 ConflictIssue 리스트 반환.

    candidate / existing_entries 는 일정 dict. 빈 리스트면 충돌 없음.
    exclude_id 와 같은 id의 기존 배치(수정 중인 자기 자신)는 검사에서 제외.
    부수효과 없음.
    """
    issues = []
    candidate_start = time_to_minutes(candidate['start_time'])
    candidate_end = time_to_minutes(candidate['end_time'])

    if candidate_end - candidate_start > max_duration:
        issues.append(ConflictIssue(
            kind="duration",
            message=f"Duration exceeds {max_duration // 60} hours.",
        ))

    for entry in existing_entries:
        entry_id = entry.get('id')
        if exclude_id and entry_id == exclude_id:
            continue
        if entry.get('day') != candidate['day']:
            continue

        entry_start = time_to_minutes(entry['start_time'])
        entry_end = time_to_minutes(entry['end_time'])
        overlap = candidate_start < entry_end and candidate_end > entry_start
        # 겹쳐도 계산함 (간격 규칙은 중복 규칙과 별개)
        gap = min(abs(candidate_start - entry_end), abs(entry_start - candidate_end))

        same_room = entry.get('room') == candidate['room']
        same_teacher = entry.get('teacher') == candidate['teacher']
        label = f"{entry.get('course_code')}-{entry.get('section')}"

        if same_room and overlap:
            issues.append(ConflictIssue(
                kind="room",
                message=f"Room conflict with {label} ({entry['start_time']}-{entry['end_time']}).",
                entry_id=entry_id,
            ))

        if same_teacher and overlap:
            issues.append(ConflictIssue(
                kind="teacher",
                message=f"Teacher conflict with {label} ({entry['start_time']}-{entry['end_time']}).",
                entry_id=entry_id,
            ))

        if (same_room or same_teacher) and gap < min_gap:
            issues.append(ConflictIssue(
                kind="gap",
                message=f"Minimum {min_gap}-minute gap violated with {label}.",
                entry_id=entry_id,
            ))

    return issues


def check_batch(candidates, existing_entries, **limits):
    """
    일괄 업로드 후보 각각을 기존(커밋된) 배치와만 비교.
    같은 배치 내 후보끼리는 비교하지 않음.
    반환: [{"row": 행 번호, "issues": [...]}] (충돌 있는 행만)
    """
    results = []
    for index, candidate in enumerate(candidates, start=1):
        issues = check_conflicts(candidate, existing_entries, **limits)
        if issues:
            results.append({"row": index, "issues": issues})
    return results
