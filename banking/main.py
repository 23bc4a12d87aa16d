import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.exceptions import register_exception_handlers
from .api.routes import router as customers_router, transfer_router
from .core.config import Settings, get_settings
from .core.db import ConnectionProvider, init_db, run_sql_script

settings = get_settings()
logging.basicConfig(level=settings.log_level)

def create_app(
    app_settings: Optional[Settings] = None,
    provider: Optional[ConnectionProvider] = None,
) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = provider or ConnectionProvider.from_settings(app_settings)
        init_db(active.engine)
        if app_settings.bootstrap_script:
            run_sql_script(active.engine, app_settings.bootstrap_script)
        app.state.provider = active
        yield
        if provider is None:
            active.dispose()

    app = FastAPI(title=app_settings.app_name, lifespan=lifespan)
    app.include_router(customers_router)
    app.include_router(transfer_router)
    register_exception_handlers(app)

    @app.get("/health")
    def read_health() -> dict[str, str]:
        return {"status": "ok"}

    return app

app = create_app()
