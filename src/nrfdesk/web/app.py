"""FastAPI application for nrf-desk.

Provides the JSON API behind the exhibitor dashboard: login/logout,
exhibitor browsing and tagging, and admin-user management.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nrfdesk import __version__
from nrfdesk.admin_users.service import AdminUserService
from nrfdesk.admin_users.store import InMemoryAdminUserStore
from nrfdesk.auth.middleware import AuthMiddleware, extract_token, require_admin
from nrfdesk.auth.models import LoginRequest
from nrfdesk.auth.provider import SessionAuthProvider
from nrfdesk.auth.resolver import CredentialResolver
from nrfdesk.classification.rules import ClassificationEngine
from nrfdesk.core.config import Settings
from nrfdesk.db.engine import DatabaseManager
from nrfdesk.exhibitors.service import ExhibitorService
from nrfdesk.exhibitors.store import InMemoryExhibitorStore
from nrfdesk.repositories.postgres.admin_users import PostgresAdminUserRepository
from nrfdesk.repositories.postgres.exhibitors import PostgresExhibitorRepository
from nrfdesk.repositories.protocols import AdminUserRepository, ExhibitorRepository
from nrfdesk.web.admin_user_router import router as admin_user_router
from nrfdesk.web.exhibitor_router import router as exhibitor_router

logger = logging.getLogger(__name__)


# --- Request/Response models ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = __version__
    storage: str


# --- Application factory ---


def create_app(
    settings: Settings | None = None,
    admin_user_store: AdminUserRepository | None = None,
    exhibitor_store: ExhibitorRepository | None = None,
    classification_engine: ClassificationEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own stores.

    Args:
        settings: Application settings. Defaults to Settings().
        admin_user_store: Optional pre-built admin-user repository.
        exhibitor_store: Optional pre-built exhibitor repository.
        classification_engine: Optional engine with custom tagging rules.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("nrfdesk").setLevel(settings.log_level.upper())

    # Storage: SQL when a database URL is configured, in-memory otherwise
    database: DatabaseManager | None = None
    if settings.database.url and (admin_user_store is None or exhibitor_store is None):
        database = DatabaseManager.from_config(settings.database)
    if admin_user_store is None:
        admin_user_store = (
            PostgresAdminUserRepository(database) if database else InMemoryAdminUserStore()
        )
    if exhibitor_store is None:
        exhibitor_store = (
            PostgresExhibitorRepository(database) if database else InMemoryExhibitorStore()
        )
    logger.info("Using %s storage", "SQL" if database is not None else "in-memory")

    if classification_engine is None:
        if settings.classification.rules_path:
            classification_engine = ClassificationEngine.from_yaml(
                settings.classification.rules_path
            )
        else:
            classification_engine = ClassificationEngine()

    resolver = CredentialResolver.from_config(admin_user_store, settings.auth)
    auth_provider = SessionAuthProvider(
        resolver=resolver,
        token_expiry_minutes=settings.auth.token_expiry_minutes,
    )
    admin_user_service = AdminUserService(
        admin_user_store,
        bcrypt_rounds=settings.auth.bcrypt_rounds,
        min_password_length=settings.admin_users.min_password_length,
        page_size=settings.admin_users.page_size,
    )
    exhibitor_service = ExhibitorService(exhibitor_store, engine=classification_engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if database is not None:
            await database.close()

    app = FastAPI(
        title="nrf-desk",
        description="Admin back-end for NRF Europe 2025 exhibitor records",
        version=__version__,
        lifespan=lifespan,
    )

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.database = database
    app.state.auth_provider = auth_provider
    app.state.admin_user_service = admin_user_service
    app.state.exhibitor_service = exhibitor_service

    app.add_middleware(AuthMiddleware)

    app.include_router(exhibitor_router)
    app.include_router(admin_user_router)

    # --- Routes ---

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="nrf-desk",
            storage="sql" if database is not None else "memory",
        )

    @app.post("/api/auth/login")
    async def login(body: LoginRequest) -> JSONResponse:
        """Verify credentials and start a session."""
        result = await auth_provider.authenticate(body)
        if not result.success:
            raise HTTPException(status_code=401, detail=result.error)

        response = JSONResponse(result.model_dump(mode="json", exclude={"error"}))
        response.set_cookie(
            settings.auth.cookie_name,
            result.token,
            max_age=settings.auth.token_expiry_minutes * 60,
            httponly=True,
            samesite="lax",
            secure=settings.auth.cookie_secure,
            path="/",
        )
        return response

    @app.post("/api/auth/logout")
    async def logout(request: Request) -> JSONResponse:
        token = extract_token(request)
        revoked = auth_provider.revoke_token(token) if token else False
        response = JSONResponse({"revoked": revoked})
        response.delete_cookie(settings.auth.cookie_name, path="/")
        return response

    @app.get("/api/auth/me")
    async def me(request: Request, principal_id: str = require_admin()) -> dict[str, Any]:
        return {
            "user_id": principal_id,
            "email": request.state.principal_email,
        }

    return app
