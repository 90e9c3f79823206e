"""
시간표 일괄 업로드 파서 (CSV / XLSX)
"""
import csv
import io
import zipfile
import logging
from datetime import datetime, time

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from utils.exceptions import ValidationError
from utils.validators import validate_entry

logger = logging.getLogger(__name__)

# (필드명, 허용 헤더들) - 앞의 헤더가 우선
COLUMNS = [
    ('course_code', ('CourseCode', 'courseCode')),
    ('section', ('Section', 'section')),
    ('day', ('Day', 'day')),
    ('start_time', ('StartTime', 'startTime')),
    ('end_time', ('EndTime', 'endTime')),
    ('room', ('Room', 'room')),
    ('building', ('Building', 'building')),
    ('teacher', ('Teacher', 'teacher')),
]

TEMPLATE_HEADERS = [headers[0] for _, headers in COLUMNS]
TEMPLATE_EXAMPLE = ['CSE101', 'A', 'Monday', '09:00', '10:30', '201', 'Building A', 'Dr. Ahmed Khan']
TEMPLATE_FILENAME = 'routine_upload_template.csv'


def parse_table(text):
    """헤더 행 + 데이터 행 → 헤더명을 키로 하는 dict 리스트"""
    if text.startswith("\ufeff"):
        text = text[1:]
    # 따옴표 안의 줄바꿈을 보존하려면 전체 텍스트를 csv에 넘겨야 함
    records = [
        values for values in csv.reader(io.StringIO(text))
        if any(v.strip() for v in values)
    ]
    if not records:
        return []

    headers = [h.strip() for h in records[0]]
    rows = []
    for values in records[1:]:
        rows.append({
            header: (values[index].strip() if index < len(values) else '')
            for index, header in enumerate(headers)
        })
    return rows


def _cell_to_text(value):
    """엑셀 셀 값 → 문자열 (시간 셀은 HH:MM)"""
    if value is None:
        return ''
    if isinstance(value, (datetime, time)):
        return value.strftime('%H:%M')
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_workbook(stream, sheet_name=None):
    """XLSX 첫 시트(또는 지정 시트)를 parse_table과 같은 형태로 변환"""
    wb = openpyxl.load_workbook(stream, data_only=True, read_only=True)
    try:
        if sheet_name and sheet_name not in wb.sheetnames:
            raise ValueError(f"Sheet '{sheet_name}' not found.")
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]

        rows_iter = ws.iter_rows(values_only=True)
        header_row = next(rows_iter, None)
        if not header_row:
            return []
        headers = [_cell_to_text(h) for h in header_row]

        rows = []
        for values in rows_iter:
            texts = [_cell_to_text(v) for v in values]
            if not any(texts):
                continue
            rows.append({
                header: (texts[index] if index < len(texts) else '')
                for index, header in enumerate(headers) if header
            })
    finally:
        wb.close()

    logger.info(f"엑셀 시트 '{ws.title}' 파싱 완료: {len(rows)}행")
    return rows


def read_upload(filename, data):
    """업로드 파일(bytes)을 확장자에 맞게 행 목록으로 변환"""
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    if ext == 'csv':
        try:
            text = data.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise ValueError("CSV file must be UTF-8 encoded.")
        return parse_table(text)
    if ext == 'xlsx':
        try:
            return parse_workbook(io.BytesIO(data))
        except (OSError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
            logger.warning(f"엑셀 파일 읽기 실패: {e}")
            raise ValueError("Not a valid Excel file.")
    raise ValueError("Only .csv or .xlsx files can be uploaded.")


def _pick(row, headers, default):
    for header in headers:
        value = row.get(header)
        if value:
            return value
    return default


def build_entries_from_rows(rows, defaults, days):
    """
    파싱된 행 → 정규화된 일정 dict 리스트.
    누락 필드는 defaults 로 채우고, 값이 있는데 형식이 틀린 행이 하나라도
    있으면 ValidationError (행 번호별 필드 오류).
    """
    entries = []
    row_errors = []
    for index, row in enumerate(rows, start=1):
        raw = {field: _pick(row, headers, defaults[field]) for field, headers in COLUMNS}
        entry, errors = validate_entry(raw, days)
        if errors:
            row_errors.append({"row": index, "errors": errors})
            continue
        entries.append(entry)

    if row_errors:
        raise ValidationError(row_errors, message="Some rows are invalid. Please fix the file and retry.")
    return entries


def template_csv():
    """업로드 템플릿 CSV (헤더 + 예시 1행)"""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(TEMPLATE_HEADERS)
    writer.writerow(TEMPLATE_EXAMPLE)
    return buf.getvalue()
