from __future__ import annotations

from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from petadoption.application.errors import AuthError
from petadoption.infrastructure.auth.context import AuthContext, fetch_user


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the bearer token, when one is sent, into ``request.state.auth_context``.

    Requests without an Authorization header pass through anonymously; routes
    that need a user enforce it through the ``get_auth_context`` dependency.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        authorization = request.headers.get("Authorization")
        if not authorization:
            return await call_next(request)

        try:
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token)

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            try:
                user_id = UUID(str(subject))
            except ValueError as exc:
                raise AuthError("Token subject is not a valid UUID") from exc
            session_factory = getattr(request.app.state, "session_factory", None)
            if session_factory is None:
                raise RuntimeError("Session factory not configured")
            async with session_factory() as session:
                user = await fetch_user(session, user_id)
            if not user or not user.is_active:
                raise AuthError("Not authorized to access this route")
            # Role is read from the stored account so demotions apply immediately
            request.state.auth_context = AuthContext(
                user_id=user_id,
                email=user.email,
                role=user.role,
                claims=claims,
            )
        except AuthError as exc:
            payload = {"success": False, "code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = dict(exc.details)
            return JSONResponse(status_code=exc.status_code, content=payload)
        return await call_next(request)
