from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from petadoption.config.settings import Settings, get_settings
from petadoption.infrastructure.auth.jwt_service import JWTService
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.infrastructure.db.session import create_engine, create_session_factory
from petadoption.infrastructure.storage.local import LocalStorageService
from petadoption.infrastructure.storage.ports import StorageService
from petadoption.interfaces.http.deps import get_app_settings
from petadoption.interfaces.http.routers import adoptions, pets, users
from petadoption.interfaces.http.routers import auth as auth_router
from petadoption.interfaces.middleware.auth_middleware import AuthMiddleware
from petadoption.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def _build_storage(settings: Settings) -> StorageService:
    if settings.uses_s3:
        from petadoption.infrastructure.storage.s3 import S3StorageService

        return S3StorageService(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            prefix=settings.s3_prefix,
            public_url_base=settings.s3_public_url_base,
        )
    return LocalStorageService(settings.upload_dir, url_prefix=settings.uploads_url_prefix)


def create_app(
    *,
    settings: Settings | None = None,
    password_hasher: PasswordHasher | None = None,
    jwt_service: JWTService | None = None,
    storage_service: StorageService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Pet Adoption API",
        version="0.1.0",
        description="Pet listings, adoption requests and user accounts",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.password_hasher = password_hasher or PasswordHasher()
    app.state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    app.state.storage_service = storage_service or _build_storage(settings)
    register_error_handlers(app)

    api = APIRouter(prefix="/api")
    api.include_router(auth_router.router)
    api.include_router(pets.router)
    api.include_router(adoptions.router)
    api.include_router(users.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    if isinstance(app.state.storage_service, LocalStorageService):
        upload_root = Path(app.state.storage_service.root)
        app.mount(
            app.state.storage_service.url_prefix,
            StaticFiles(directory=upload_root, check_dir=False),
            name="uploads",
        )

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("Pet adoption API configured for %s environment", settings.environment)
    return app


app = create_app()
