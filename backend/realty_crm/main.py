import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from realty_crm import models  # noqa: F401  (registers tables on Base.metadata)
from realty_crm.api import api_router
from realty_crm.core.config import Settings, settings as default_settings
from realty_crm.core.database import Base, create_db_engine, create_session_factory
from realty_crm.core.errors import register_exception_handlers
from realty_crm.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings
    engine = create_db_engine(config.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("Database engine opened", extra={"dialect": engine.dialect.name})
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or default_settings
    setup_logging(config)

    app = FastAPI(
        title="Real Estate CRM API",
        description="Listings, clients and leads for real-estate agents",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, expose_error_details=config.EXPOSE_ERROR_DETAILS)
    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"message": "Real Estate CRM API", "version": "1.0.0"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
