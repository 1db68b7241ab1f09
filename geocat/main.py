# geocat/main.py
import os, asyncio, signal
import uvicorn
from geocat.api import create_app
from geocat.settings import Settings
from geocat.observability.logging_setup import setup_logging, get_logger

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 저장소
    s.storage.db_path = os.getenv("DB_PATH", s.storage.db_path)

    # 인증
    s.auth.secret_key = os.getenv("SECRET_KEY", s.auth.secret_key)
    s.auth.token_max_age_sec = int(os.getenv("TOKEN_MAX_AGE_SEC", s.auth.token_max_age_sec))
    s.auth.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", s.auth.bcrypt_rounds))
    s.auth.allow_role_on_register = _b("ALLOW_ROLE_ON_REGISTER", s.auth.allow_role_on_register)
    s.auth.bootstrap_admin_email = os.getenv("ADMIN_EMAIL", s.auth.bootstrap_admin_email)
    s.auth.bootstrap_admin_password = os.getenv("ADMIN_PASSWORD", s.auth.bootstrap_admin_password)
    s.auth.bootstrap_admin_name = os.getenv("ADMIN_NAME", s.auth.bootstrap_admin_name)

    # API
    s.api.prefix = os.getenv("API_PREFIX", s.api.prefix)

    # 관측성
    s.observability.host = os.getenv("HTTP_HOST", s.observability.host)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

async def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json=s.observability.log_json)
    log = get_logger()
    log.info("설정 로드 완료")

    app = create_app(s)
    server = uvicorn.Server(uvicorn.Config(
        app, host=s.observability.host, port=s.observability.http_port, log_config=None
    ))

    http_task = asyncio.create_task(server.serve())
    log.info(f"HTTP 서버 시작됨: {s.observability.host}:{s.observability.http_port}")

    stop = asyncio.Future()
    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            try: loop.add_signal_handler(sig, lambda: (not stop.done()) and stop.set_result(True))
            except NotImplementedError: pass
    except RuntimeError: pass

    await asyncio.wait([http_task, stop], return_when=asyncio.FIRST_COMPLETED)
    server.should_exit = True
    await http_task

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
