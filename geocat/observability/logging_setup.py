from __future__ import annotations
import logging
import sys
import time
import uuid
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except Exception:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

# uvicorn 접근 로그는 request_context 가 대신 남김
_ROUTED = ("uvicorn", "uvicorn.error", "aiosqlite", "asyncio")
_SILENCED = ("uvicorn.access",)

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _ROUTED:
        l = logging.getLogger(name)
        l.handlers = [InterceptHandler()]
        l.propagate = False
    for name in _SILENCED:
        l = logging.getLogger(name)
        l.handlers = []
        l.propagate = False
    # aiosqlite 는 모든 쿼리를 DEBUG 로 남김
    logging.getLogger("aiosqlite").setLevel(logging.INFO)

# 콘솔 포맷: 로거 이름과 요청 ID 만 노출
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", json: bool = False) -> None:
    """
    loguru 초기화.
    - 개발: stderr 컬러 출력
    - 운영(json=True): stdout 한 줄 JSON (loguru serialize)
    - stdlib logging 흡수
    """
    logger.remove()
    logger.configure(extra={"name": "geocat", "request_id": "-"})
    level = log_level.upper()
    if json:
        logger.add(sys.stdout, serialize=True, backtrace=False, diagnose=False,
                   level=level, enqueue=True)
    else:
        logger.add(sys.stderr, format=DEV_FORMAT, colorize=True, backtrace=True,
                   diagnose=False, level=level)
    _hook_stdlib_logging()

def get_logger(name: str = "geocat", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """컨텍스트 매니저로 일시 컨텍스트 부여."""
    return logger.contextualize(**ctx)

_access = get_logger("geocat.access")

async def request_context(request, call_next):
    """
    HTTP 미들웨어: 요청마다 request_id 를 로그 컨텍스트에 넣고 접근 로그를 남깁니다.
    """
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    started = time.perf_counter()
    with with_context(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        _access.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    response.headers["x-request-id"] = request_id
    return response
