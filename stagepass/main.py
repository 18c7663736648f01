"""
StagePass API

Run with: granian --interface asgi stagepass.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from stagepass.platform.app_factory import create_app
from stagepass.platform.config.di import cleanup, container, setup
from stagepass.platform.config.wire_modules import WIRE_MODULES
from stagepass.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from stagepass.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [StagePass] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [StagePass] Dependency injection wired')

    # Alembic owns the schema in production; this only fills in missing tables
    await create_db_and_tables()
    Logger.base.info('🗄️  [StagePass] Database ready')

    Logger.base.info('✅ [StagePass] Startup complete')

    yield

    Logger.base.info('🛑 [StagePass] Shutting down...')
    container.unwire()
    cleanup()
    await dispose_engine()
    Logger.base.info('👋 [StagePass] Shutdown complete')


app = create_app(lifespan=lifespan)
