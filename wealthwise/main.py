import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from wealthwise.core.config import Settings, load_settings
from wealthwise.core.errors import register_exception_handlers
from wealthwise.core.logging_config import configure_logging
from wealthwise.db.base import Base
from wealthwise.db.sessions import create_db_engine, create_session_factory
from wealthwise.routes import auth, chat, frontend
from wealthwise.services.openai_service import ChatService

# Import all models to ensure they're registered with Base
import wealthwise.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_app(settings: Settings, engine: Optional[Engine] = None) -> FastAPI:
    """Wire the application around an already-loaded ``settings``.

    ``engine`` may be supplied to share a database with the caller; otherwise
    one is opened from ``settings.DATABASE_URL``.
    """
    if engine is None:
        engine = create_db_engine(settings.DATABASE_URL)

    # Create tables
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="WealthWise accounts and financial assistant chatbot",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.chat_service = ChatService(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(chat.router)

    @app.get("/api/test")
    def api_test():
        return {"message": "API is working!"}

    # Catch-all must come last
    app.include_router(frontend.router)

    return app


def log_startup(settings: Settings) -> None:
    logger.info("%s v%s running on port %s", settings.APP_NAME, settings.APP_VERSION, settings.PORT)
    logger.info("API available at http://localhost:%s/api/test", settings.PORT)
    logger.info("Auth routes: Enabled")
    logger.info(
        "Chatbot: %s",
        "Enabled" if settings.chatbot_enabled else "Disabled (No API key)",
    )
    logger.info("Environment: %s", settings.ENVIRONMENT or "development")


def main() -> None:
    settings = load_settings()
    configure_logging(settings)

    if not settings.chatbot_enabled:
        logger.warning("OPENAI_API_KEY is not defined; the chatbot will not function without it")

    app = create_app(settings)
    logger.info("Connected to database")
    log_startup(settings)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
