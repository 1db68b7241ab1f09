"""
HTTP endpoints for GeoCat observability.

Health, readiness, Prometheus metrics and service info, mounted at the
application root next to the versioned API.
"""

import time
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from geocat.adapters.storage.database import ping
from geocat.settings import Settings

def create_health_router(settings: Settings) -> APIRouter:
    """관측용 라우터를 생성합니다."""
    router = APIRouter(tags=["observability"])
    obs = settings.observability
    start_time = time.time()

    def status(state: str) -> dict:
        return {"status": state, "service": obs.service_name, "timestamp": time.time()}

    @router.get("/health")
    async def health():
        """프로세스 생존 확인 (DB 미접근)"""
        return status("ok")

    @router.get("/ready")
    async def ready():
        """레디니스 체크: 데이터베이스에 질의할 수 있어야 준비 완료"""
        if not await ping(settings.storage.db_path):
            raise HTTPException(status_code=503, detail="Database unavailable")
        return status("ready")

    @router.get("/metrics")
    async def metrics():
        if not obs.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @router.get("/info")
    async def info():
        return {
            "service": obs.service_name,
            "version": obs.build_version,
            "uptime_seconds": int(time.time() - start_time),
            "metrics_enabled": obs.metrics_enabled,
            "log_level": obs.log_level,
        }

    @router.get("/")
    async def root():
        """엔드포인트 목록"""
        prefix = settings.api.prefix
        endpoints = {name: f"/{name}" for name in ("health", "ready", "metrics", "info")}
        endpoints.update({
            "cats": f"{prefix}/cats",
            "users": f"{prefix}/users",
            "login": f"{prefix}/auth/login",
        })
        return {"service": obs.service_name, "version": obs.build_version, "endpoints": endpoints}

    return router
