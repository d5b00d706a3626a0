from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from signature_engine.api.middleware import register_error_handlers
from signature_engine.api.routes import audit, signing
from signature_engine.config import Settings
from signature_engine.database import create_db_engine, create_session_factory, init_db
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: the audit store handle lives on app.state, not in a module global
        engine = create_db_engine(settings.database_url)
        try:
            init_db(engine)
            Path(settings.signed_dir).mkdir(parents=True, exist_ok=True)
            app.state.engine = engine
            app.state.session_factory = create_session_factory(engine)
            logger.info("Application started")
        except Exception as e:
            logger.error(f"Error during startup: {e}")
            engine.dispose()
            raise
        yield
        # Shutdown
        engine.dispose()
        logger.info("Application shutdown")

    app = FastAPI(
        title="Signature Engine API",
        description="Places signature images on PDF pages and keeps a hash audit trail",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(signing.router, prefix="/api")
    app.include_router(audit.router, prefix="/api")

    # Signed PDFs (read-only)
    app.mount(
        settings.signed_url_prefix,
        StaticFiles(directory=settings.signed_dir, check_dir=False),
        name="signed"
    )

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Backend is running"

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
