# interlinear/api/main.py
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interlinear import __version__
from interlinear.api.routes import router
from interlinear.shared.config import AppEnv, settings
from interlinear.shared.container import Container, close_resources, container as default_container
from interlinear.shared.logging_config import configure_logging
from interlinear.shared.telemetry import instrument_fastapi, setup_telemetry

logger = structlog.get_logger()


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Factory function to create the FastAPI application.
    Pass a container to run against overridden gateways (tests).
    """
    container = container or default_container

    # Routes use @inject, so the module must be wired before the first request
    container.wire(modules=["interlinear.api.routes"])

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        setup_telemetry(settings.OTEL_SERVICE_NAME)
        logger.info("app_startup", env=settings.APP_ENV.value)

        yield

        logger.info("app_shutdown")
        await close_resources(container)
        container.unwire()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="Interlinear lexicon resolution and translation caching engine",
        lifespan=lifespan,
        docs_url="/docs" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        redoc_url=None,
    )
    app.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router)

    instrument_fastapi(app)
    return app


# Entry point for local debugging (e.g. `python -m interlinear.api.main`)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "interlinear.api.main:create_app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        factory=True,
    )
