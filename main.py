"""
Bookstore API — application entry point.

``create_app`` is the composition root: it builds the database engine,
session factory, password hasher, token issuer and Google client in
dependency order and keeps them on ``app.state`` for the route
dependencies to pick up.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from auth.google import GoogleOAuthClient
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from books.routes import router as books_router
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, create_tables
from users.routes import router as users_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("httpcore", "httpx", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Bookstore API",
        version="1.0.0",
        description="Bookstore backend: accounts, Google sign-in and the book catalog.",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_issuer = TokenIssuer(settings.jwt_secret, settings.jwt_expiry_seconds)
    app.state.google_client = GoogleOAuthClient(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(users_router, prefix="/api/users")
    app.include_router(books_router, prefix="/api/books")

    @app.on_event("startup")
    async def on_startup():
        await create_tables(engine)
        if not app.state.google_client.is_configured():
            logger.warning("Google sign-in disabled — GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET not set")
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


configure_logging(config)
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
