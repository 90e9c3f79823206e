"""
시간표 저장 흐름에서 사용하는 예외
"""


class ValidationError(ValueError):
    """입력 형식 오류 (필드별 메시지 포함)"""

    def __init__(self, errors, message="Validation failed."):
        super().__init__(message)
        self.errors = errors


class ConflictError(Exception):
    """충돌 검사 실패 - 저장 전체가 차단됨"""

    def __init__(self, conflicts, message="Conflicts detected."):
        super().__init__(message)
        self.conflicts = conflicts


class EntryNotFoundError(LookupError):
    """수업 일정을 찾을 수 없음"""
