import os

class Config:
    """애플리케이션 설정"""

    # 보안
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'routine-dashboard-secret-key'

    # 파일 업로드 (메모리에서 바로 파싱)
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024  # 4MB
    ALLOWED_EXTENSIONS = {'csv', 'xlsx'}

    # 로컬 JSON 저장 (Cosmos DB fallback)
    DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')
    ROUTINES_FILE = os.path.join(DATA_DIR, 'routines.json')

    # Azure Cosmos DB
    COSMOS_DB_ENDPOINT = os.environ.get('COSMOS_DB_ENDPOINT')
    COSMOS_DB_KEY = os.environ.get('COSMOS_DB_KEY')
    COSMOS_DATABASE_NAME = os.environ.get('COSMOS_DATABASE_NAME', 'UniversityPortalDB')
    COSMOS_CONTAINER_NAME = os.environ.get('COSMOS_CONTAINER_NAME', 'RoutineData')

    # 주간 그리드
    DAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']
    ROOMS = ['201', '202', '204', '301', 'Lab-1']
    TIME_SLOTS = [
        '08:00', '09:00', '10:00', '11:00', '12:00',
        '13:00', '14:00', '15:00', '16:00',
    ]
    SECTIONS = ['A', 'B', 'C', 'D']

    # 충돌 검사 규칙
    MAX_DURATION_MINUTES = 180
    MIN_GAP_MINUTES = 15

    # 일괄 업로드 누락 필드 기본값
    IMPORT_DEFAULTS = {
        'course_code': 'CSE101',
        'section': 'A',
        'day': 'Monday',
        'start_time': '09:00',
        'end_time': '10:30',
        'room': '201',
        'building': 'Building A',
        'teacher': 'TBD',
    }

    # 수업 색상 프리셋
    ENTRY_COLORS = [
        '#2563EB',  # Blue
        '#16A34A',  # Green
        '#9333EA',  # Purple
        '#D97706',  # Amber
        '#E11D48',  # Rose
    ]

    # 로그
    LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # 서버
    HOST = '0.0.0.0'
    PORT = int(os.environ.get('PORT', 5000))
    DEBUG = os.environ.get('FLASK_ENV') == 'development'

    @classmethod
    def use_cosmos_db(cls):
        """Cosmos DB 사용 여부 판단"""
        return bool(cls.COSMOS_DB_ENDPOINT and cls.COSMOS_DB_KEY)
