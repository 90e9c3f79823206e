import logging
from functools import wraps
from flask import jsonify

from utils.exceptions import ConflictError, EntryNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def handle_errors(f):
    """API 엔드포인트 에러 핸들링 데코레이터"""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ConflictError as e:
            logger.warning(f"충돌로 저장 거부: {len(e.conflicts)}건")
            return jsonify({"success": False, "error": str(e), "conflicts": e.conflicts}), 409
        except ValidationError as e:
            logger.warning(f"입력 검증 실패: {e.errors}")
            return jsonify({"success": False, "error": str(e), "errors": e.errors}), 400
        except EntryNotFoundError as e:
            logger.warning(f"수업 일정을 찾을 수 없음: {e}")
            return jsonify({"success": False, "error": "Schedule entry not found."}), 404
        except ValueError as e:
            logger.warning(f"잘못된 값: {e}")
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception as e:
            logger.error(f"서버 오류: {e}", exc_info=True)
            return jsonify({"success": False, "error": "Internal server error."}), 500
    return decorated
