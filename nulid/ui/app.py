"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

import nulid
from nulid.config import build_generator, load_config
from nulid.internal.health import HealthChecker, check_event_loop, create_drift_check, create_generator_check
from nulid.internal.logging import StructuredLogger, get_logger, parse_level
from nulid.sources.clock import SystemClock
from nulid.utils.crash import create_async_handler
from nulid.ui.routes import api, health


def create_app(config=None, generator=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=parse_level(config.logging.level))
    logger_instance = get_logger()

    generator = generator or build_generator(config.generator)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("generator", create_generator_check(generator), critical=True)
    if isinstance(generator.clock, SystemClock):
        health_checker.register("clock", create_drift_check(generator.clock), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=nulid.__version__, node_id=generator.node_id())
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="NULID service",
        version=nulid.__version__,
        description="nanosecond-precision sortable identifiers",
        lifespan=lifespan,
    )

    api.init(generator)
    health.init(generator, health_checker)

    app.include_router(api.router)
    app.include_router(health.router)

    app.state.generator = generator
    return app
