import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rollcall.api.router import api_router
from rollcall.core.config import get_settings
from rollcall.core.errors import RollcallError
from rollcall.db.session import get_session_factory
from rollcall.services.classroom import open_classroom

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session_factory = get_session_factory()
        with session_factory() as db:
            classroom = open_classroom(db)
            app.state.lookup_index = classroom.index
        logger.info("Store opened with %s active students", len(app.state.lookup_index))
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.lookup_index = None
    app.state.rng = None

    @app.exception_handler(RollcallError)
    async def rollcall_error_handler(_: Request, exc: RollcallError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "error": type(exc).__name__})

    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


app = create_app()
