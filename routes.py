"""
Routine Dashboard - 라우트 정의
"""
from flask import Blueprint, Response, current_app, jsonify, request

from models import ScheduleEntry
from services import report_service, schedule_service
from services.csv_importer import TEMPLATE_FILENAME, parse_table, read_upload, template_csv
from services.routine_storage import FILTER_FIELDS, get_storage
from services.slot_grid import build_grid, sort_entries
from utils.error_handlers import handle_errors
from utils.exceptions import EntryNotFoundError
from utils.validators import entry_form_fields

api_bp = Blueprint('api', __name__, url_prefix='/api')


def _json_body():
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValueError("Request body is missing.")
    return data


def _rows_from_request():
    """업로드 파일(csv/xlsx) 또는 JSON {"text": "..."} 에서 행 목록 추출"""
    if 'file' in request.files:
        file = request.files['file']
        if file.filename == '':
            raise ValueError("No file selected.")
        ext = file.filename.rsplit('.', 1)[-1].lower() if '.' in file.filename else ''
        if ext not in current_app.config['ALLOWED_EXTENSIONS']:
            raise ValueError("Only .csv or .xlsx files can be uploaded.")
        return read_upload(file.filename, file.read())

    data = request.get_json(silent=True) or {}
    text = data.get('text')
    if not text:
        raise ValueError("No file uploaded.")
    return parse_table(text)


def _query_filters(fields=FILTER_FIELDS, **fixed):
    """쿼리스트링 필터 추출. course_code 는 저장 형식(대문자)에 맞춘다."""
    filters = {k: request.args.get(k) for k in fields if request.args.get(k)}
    filters.update(fixed)
    if filters.get('course_code'):
        filters['course_code'] = filters['course_code'].upper()
    return filters


def _csv_download(content, filename):
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


@api_bp.route('/health', methods=['GET'])
def health():
    return jsonify({"success": True, "storage": get_storage().kind})


@api_bp.route('/form/entry', methods=['GET'])
def entry_form():
    """일정 입력 폼 필드 정의"""
    return jsonify({"success": True, "fields": entry_form_fields(current_app.config)})


# ===== 수업 일정 =====

@api_bp.route('/entries', methods=['GET'])
@handle_errors
def list_entries():
    """일정 목록 (day, teacher, room, section, course_code 필터)"""
    filters = _query_filters()
    entries = sort_entries(get_storage().list_entries(filters), current_app.config['DAYS'])
    return jsonify({"success": True, "entries": entries, "count": len(entries)})


@api_bp.route('/entries/<entry_id>', methods=['GET'])
@handle_errors
def get_entry(entry_id):
    entry = get_storage().get_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return jsonify({"success": True, "entry": entry})


@api_bp.route('/entries', methods=['POST'])
@handle_errors
def create_entry():
    """일정 추가 (충돌 시 409)"""
    entry = schedule_service.create_entry(get_storage(), _json_body(), current_app.config)
    return jsonify({
        "success": True,
        "message": f"'{ScheduleEntry.from_dict(entry).label}' has been scheduled.",
        "entry": entry,
    }), 201


@api_bp.route('/entries/<entry_id>', methods=['PUT'])
@handle_errors
def update_entry(entry_id):
    """일정 수정 (자기 자신은 충돌 검사에서 제외)"""
    entry = schedule_service.update_entry(get_storage(), entry_id, _json_body(), current_app.config)
    return jsonify({"success": True, "message": "Schedule entry updated.", "entry": entry})


@api_bp.route('/entries/<entry_id>', methods=['DELETE'])
@handle_errors
def delete_entry(entry_id):
    schedule_service.delete_entry(get_storage(), entry_id)
    return jsonify({"success": True, "message": "Schedule entry deleted."})


@api_bp.route('/entries/check', methods=['POST'])
@handle_errors
def check_entry():
    """폼 입력 중 실시간 충돌 미리보기"""
    data = _json_body()
    _, issues = schedule_service.preview_conflicts(
        get_storage(), data, current_app.config, exclude_id=data.get('exclude_id')
    )
    return jsonify({
        "success": True,
        "ok": not issues,
        "conflicts": [i.to_dict() for i in issues],
    })


# ===== 보기 =====

@api_bp.route('/grid', methods=['GET'])
@handle_errors
def get_grid():
    """요일별 강의실 × 시간 슬롯 그리드"""
    config = current_app.config
    day = request.args.get('day', config['DAYS'][0])
    if day not in config['DAYS']:
        raise ValueError(f"Unknown day: {day}")
    entries = get_storage().list_entries({"day": day})
    grid = build_grid(entries, day, config['ROOMS'], config['TIME_SLOTS'])
    return jsonify({"success": True, "grid": grid})


@api_bp.route('/routines/teacher/<teacher>', methods=['GET'])
@handle_errors
def teacher_routine(teacher):
    entries = get_storage().list_entries({"teacher": teacher})
    return jsonify({"success": True, "teacher": teacher,
                    "entries": sort_entries(entries, current_app.config['DAYS'])})


@api_bp.route('/routines/section/<section>', methods=['GET'])
@handle_errors
def section_routine(section):
    filters = _query_filters(('course_code',), section=section)
    entries = get_storage().list_entries(filters)
    return jsonify({"success": True, "section": section,
                    "entries": sort_entries(entries, current_app.config['DAYS'])})


@api_bp.route('/events', methods=['GET'])
@handle_errors
def get_events():
    """FullCalendar 주간 반복 이벤트 반환"""
    entries = get_storage().list_entries()
    events = report_service.format_events(
        entries, teacher=request.args.get('teacher'), room=request.args.get('room')
    )
    return jsonify(events)


# ===== 일괄 업로드 =====

@api_bp.route('/import/preview', methods=['POST'])
@handle_errors
def import_preview():
    """업로드 파일 파싱 결과 미리보기 (저장하지 않음)"""
    rows = _rows_from_request()
    headers = list(rows[0].keys()) if rows else []
    return jsonify({"success": True, "headers": headers, "rows": rows, "count": len(rows)})


@api_bp.route('/import', methods=['POST'])
@handle_errors
def import_entries():
    """일괄 업로드 - 한 행이라도 충돌/오류가 있으면 전체 거부"""
    rows = _rows_from_request()
    entries = schedule_service.import_rows(get_storage(), rows, current_app.config)
    return jsonify({
        "success": True,
        "message": f"{len(entries)} schedule entries imported.",
        "entries": entries,
        "count": len(entries),
    }), 201


@api_bp.route('/import/template', methods=['GET'])
def import_template():
    return _csv_download(template_csv(), TEMPLATE_FILENAME)


# ===== 리포트 =====

@api_bp.route('/reports', methods=['GET'])
@handle_errors
def get_reports():
    """교수별 / 강의실별 / 요일별 집계"""
    entries = get_storage().list_entries()
    report = report_service.build_report(entries, current_app.config['DAYS'])
    return jsonify({"success": True, "report": report})


@api_bp.route('/reports/export', methods=['GET'])
@handle_errors
def export_reports():
    entries = get_storage().list_entries()
    content = report_service.export_entries_csv(entries, current_app.config['DAYS'])
    return _csv_download(content, 'routine_export.csv')
