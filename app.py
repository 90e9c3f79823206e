"""
Routine Dashboard - 대학 주간 시간표(루틴) 관리 및 충돌 검사 API
"""
import os
import logging
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

load_dotenv()

from flask import Flask
from config import Config
from routes import api_bp
from services.routine_storage import EXTENSION_KEY

LOG_FILENAME = 'routine_dashboard.log'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_console_handler = None
_file_handler = None


def _configure_logging(app):
    """
    콘솔 + 회전 파일 로그.
    레벨은 매번 다시 적용하고, LOG_DIR 이 바뀌면 파일 핸들러를 교체한다.
    """
    global _console_handler, _file_handler

    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(app.config['LOG_LEVEL'])

    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(formatter)
        root.addHandler(_console_handler)

    log_path = os.path.abspath(os.path.join(app.config['LOG_DIR'], LOG_FILENAME))
    if _file_handler is not None:
        if _file_handler.baseFilename == log_path:
            return
        root.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = RotatingFileHandler(
        log_path, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8'
    )
    _file_handler.setFormatter(formatter)
    root.addHandler(_file_handler)


def create_app(overrides=None, storage=None):
    """Flask 애플리케이션 팩토리"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # 필수 디렉토리 생성
    os.makedirs(app.config['DATA_DIR'], exist_ok=True)
    os.makedirs(app.config['LOG_DIR'], exist_ok=True)

    _configure_logging(app)

    # 저장소 주입 (없으면 첫 요청에서 설정으로 생성)
    if storage is not None:
        app.extensions[EXTENSION_KEY] = storage

    # Blueprint 등록
    app.register_blueprint(api_bp)

    # 보안 헤더
    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app


# Azure WebApp 호환을 위한 전역 인스턴스
app = create_app()


def main():
    """메인 실행 함수"""
    print("=" * 50)
    print("  Routine Dashboard")
    print("=" * 50)
    print(f"  http://localhost:{Config.PORT}/api/health")
    storage = "Azure Cosmos DB" if Config.use_cosmos_db() else "로컬 JSON 파일"
    print(f"  저장소: {storage}")
    print("=" * 50)

    if Config.DEBUG:
        app.run(debug=True, host=Config.HOST, port=Config.PORT)
    else:
        from waitress import serve
        print(f"Waitress 서버 시작 (포트: {Config.PORT})")
        serve(app, host=Config.HOST, port=Config.PORT)


if __name__ == '__main__':
    main()
