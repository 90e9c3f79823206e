"""
수업 일정 저장 흐름 - 검증 → 충돌 검사 → 저장
충돌이 하나라도 있으면 아무것도 쓰지 않는다.
"""
import logging

from models import ScheduleEntry
from services.conflict_checker import check_batch, check_conflicts
from services.csv_importer import build_entries_from_rows
from utils.exceptions import ConflictError, EntryNotFoundError, ValidationError
from utils.validators import validate_entry

logger = logging.getLogger(__name__)


def _limits(config):
    return {
        "max_duration": config['MAX_DURATION_MINUTES'],
        "min_gap": config['MIN_GAP_MINUTES'],
    }


def _pick_color(config, index):
    palette = config['ENTRY_COLORS']
    return palette[index % len(palette)]


def preview_conflicts(storage, data, config, exclude_id=None):
    """폼 입력 검증 후 충돌 목록 반환 (저장하지 않음)"""
    entry, errors = validate_entry(data, config['DAYS'])
    if errors:
        raise ValidationError(errors)
    issues = check_conflicts(entry, storage.list_entries(), exclude_id=exclude_id, **_limits(config))
    return entry, issues


def create_entry(storage, data, config):
    entry, issues = preview_conflicts(storage, data, config)
    if issues:
        raise ConflictError([i.to_dict() for i in issues])

    record = ScheduleEntry(**entry, color=_pick_color(config, storage.count_entries()))
    saved = record.to_dict()
    storage.create_entry(saved)
    return saved


def update_entry(storage, entry_id, data, config):
    """기존 일정에 입력을 덮어쓴 뒤 자기 자신을 제외하고 재검사"""
    current = storage.get_entry(entry_id)
    if current is None:
        raise EntryNotFoundError(entry_id)

    merged = {**current, **data}
    entry, issues = preview_conflicts(storage, merged, config, exclude_id=entry_id)
    if issues:
        raise ConflictError([i.to_dict() for i in issues])

    storage.update_entry(entry_id, entry)
    return {**current, **entry, "id": entry_id}


def delete_entry(storage, entry_id):
    if not storage.delete_entry(entry_id):
        raise EntryNotFoundError(entry_id)


def import_rows(storage, rows, config):
    """
    일괄 업로드. 각 행은 이미 저장된 일정하고만 비교하며
    (같은 파일 안의 행끼리는 비교하지 않음) 한 행이라도 충돌하면 전체 거부.
    """
    if not rows:
        raise ValueError("No rows found in the uploaded file.")

    candidates = build_entries_from_rows(rows, config['IMPORT_DEFAULTS'], config['DAYS'])
    existing = storage.list_entries()

    rejected = check_batch(candidates, existing, **_limits(config))
    if rejected:
        logger.warning(f"일괄 업로드 거부: {len(rejected)}/{len(candidates)}행 충돌")
        raise ConflictError(
            [{"row": r["row"], "issues": [i.to_dict() for i in r["issues"]]} for r in rejected],
            message="Conflicts detected. Please resolve conflicts before uploading.",
        )

    records = [
        ScheduleEntry(**entry, color=_pick_color(config, len(existing) + index)).to_dict()
        for index, entry in enumerate(candidates)
    ]
    storage.create_entries(records)
    logger.info(f"일괄 업로드 완료: {len(records)}개 일정")
    return records
