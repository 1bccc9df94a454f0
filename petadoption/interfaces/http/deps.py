from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from petadoption.application.errors import AuthError
from petadoption.config.settings import Settings
from petadoption.infrastructure.auth.context import AuthContext
from petadoption.infrastructure.auth.jwt_service import JWTService
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.infrastructure.db.session import SQLAlchemyUnitOfWork
from petadoption.infrastructure.storage.ports import StorageService


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Not authorized to access this route")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not configured")
    return settings


def get_password_hasher(request: Request) -> PasswordHasher:
    hasher = getattr(request.app.state, "password_hasher", None)
    if hasher is None:
        raise RuntimeError("Password hasher not configured")
    return hasher


def get_jwt_service(request: Request) -> JWTService:
    service = getattr(request.app.state, "jwt_service", None)
    if service is None:
        raise RuntimeError("JWT service not configured")
    return service


def get_storage_service(request: Request) -> StorageService:
    service = getattr(request.app.state, "storage_service", None)
    if service is None:
        raise RuntimeError("Storage service not configured")
    return service
