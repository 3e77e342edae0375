from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mybank.core.config import settings
from mybank.core.database import SessionLocal, run_migrations
from mybank.core.errors import register_exception_handlers
from mybank.core.logging import configure_logging
from mybank.routes.customers import router as customers_router
from mybank.routes.health import router as health_router
from mybank.services.seed import seed_demo


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Schema must be at head before the first request is served.
    if settings.run_migrations:
        run_migrations()
    if settings.seed_demo_data:
        with SessionLocal() as db:
            seed_demo(db)
    logger.info("mybank API started env=%s", settings.env)
    yield


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title="MyBank Customer API", version="0.1.0", lifespan=lifespan)

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(customers_router, prefix="/customers", tags=["customers"])

    return app


app = create_app()
