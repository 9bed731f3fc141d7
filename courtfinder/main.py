"""Courts Finder API application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from courtfinder.core.config import Settings, settings as default_settings
from courtfinder.core.database import Database
from courtfinder.routes import auth, sports, venues
from courtfinder.schemas import HealthOut
from courtfinder.services.image_host import ImageHost

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the connection pool and image-host client once per process."""
    settings: Settings = app.state.settings
    database = Database(settings)
    await database.connect()
    app.state.database = database
    app.state.image_host = ImageHost(settings)
    yield
    await app.state.image_host.aclose()
    await database.dispose()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": message})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Registered before CORS so real pre-flights are answered by CORSMiddleware
    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK)
        return await call_next(request)

    # The site and admin panel are served from other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Admin-Secret"],
        max_age=86400,
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Mount routes
    app.include_router(venues.router, prefix=settings.api_prefix)
    app.include_router(venues.stations_router, prefix=settings.api_prefix)
    app.include_router(sports.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)

    @app.get("/health", response_model=HealthOut)
    async def health():
        return {"status": "ok", "app": settings.app_name}

    return app


app = create_app()
