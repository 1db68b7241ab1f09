"""
FastAPI application factory for GeoCat.
"""

import secrets
from contextlib import asynccontextmanager
from fastapi import FastAPI
from geocat.adapters.security import BcryptPasswordHasher, SignedTokenCodec
from geocat.adapters.storage import SQLiteCatStore, SQLiteUserStore
from geocat.observability.health import create_health_router
from geocat.observability.logging_setup import get_logger, request_context
from geocat.orchestrators import CatOrchestrator, UserOrchestrator
from geocat.settings import Settings
from .cats import router as cats_router
from .errors import install_error_handlers
from .users import auth_router, router as users_router

log = get_logger("geocat.api")

def create_app(settings: Settings) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    secret_key = settings.auth.secret_key
    if not secret_key:
        secret_key = secrets.token_urlsafe(32)
        log.warning("SECRET_KEY가 설정되지 않아 임시 키를 사용합니다. 재시작하면 토큰이 무효화됩니다.")

    user_store = SQLiteUserStore(settings.storage.db_path)
    cat_store = SQLiteCatStore(settings.storage.db_path)
    users = UserOrchestrator(
        user_store,
        BcryptPasswordHasher(settings.auth.bcrypt_rounds),
        SignedTokenCodec(secret_key, settings.auth.token_max_age_sec),
        allow_role_on_register=settings.auth.allow_role_on_register,
    )
    cats = CatOrchestrator(cat_store, user_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await user_store.init()
        await cat_store.init()
        if settings.auth.bootstrap_admin_email and settings.auth.bootstrap_admin_password:
            await users.bootstrap_admin(
                settings.auth.bootstrap_admin_email,
                settings.auth.bootstrap_admin_password,
                settings.auth.bootstrap_admin_name,
            )
        log.info(f"{settings.observability.service_name} 시작: db={settings.storage.db_path}")
        yield
        log.info(f"{settings.observability.service_name} 종료")

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Location-tagged cat registry",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.users = users
    app.state.cats = cats

    app.middleware("http")(request_context)
    install_error_handlers(app)
    app.include_router(create_health_router(settings))
    app.include_router(cats_router, prefix=settings.api.prefix)
    app.include_router(users_router, prefix=settings.api.prefix)
    app.include_router(auth_router, prefix=settings.api.prefix)
    return app
