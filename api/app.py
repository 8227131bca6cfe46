"""
Application factory.

All process-wide collaborators (engine, session factory, hasher, token
issuer, auth service) are built here from an explicit ``Settings`` and
hung on ``app.state``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.health import router as health_router
from api.middleware import register_middleware
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from auth.store import CredentialStore
from auth.tokens import TokenIssuer
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    logger.info("Ensuring database schema…")
    try:
        await init_models(engine)
    except Exception as exc:
        # Keep serving; /api/health reports the database as disconnected.
        logger.error("Database initialisation failed: %s", exc)
    logger.info("Application ready to accept requests.")
    yield
    await engine.dispose()
    logger.info("Database engine disposed.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    # Settings() raises if JWT_SECRET is not configured.
    settings = settings or Settings()

    app = FastAPI(
        title="Splito Auth Backend",
        version="1.0.0",
        description="User registration, login and profile with bearer tokens.",
        lifespan=lifespan,
    )

    engine = build_engine(settings.database_url, echo=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.auth_service = AuthService(
        store=CredentialStore(build_session_factory(engine)),
        hasher=PasswordHasher(rounds=settings.password_hash_rounds),
        tokens=TokenIssuer(settings.jwt_secret, settings.jwt_expiry_seconds),
    )

    register_middleware(app)
    register_exception_handlers(app)

    # CORS, added last so it is the outermost user middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(health_router, prefix="/api")

    return app
