import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from formbuilder.config import Settings, get_settings
from formbuilder.exceptions import FormNotFoundError, InvalidFormIdError
from formbuilder.logging_setup import configure_logging
from formbuilder.models.common import ErrorResponse
from formbuilder.routers.forms import router as forms_router
from formbuilder.services.repository import FormRepository

logger = logging.getLogger(__name__)


# --- Exception handlers ---

def _error(status_code: int, error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error_code=error_code, message=message).model_dump(),
    )


async def not_found_handler(request: Request, exc: FormNotFoundError):
    return _error(404, "not_found", str(exc))


async def invalid_id_handler(request: Request, exc: InvalidFormIdError):
    return _error(400, "invalid_id", str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error(400, "bad_request", f"Malformed request: {exc.errors()}")


# --- FastAPI app ---

def create_app(repository: FormRepository | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the API around a repository.

    A fresh repository is created when none is passed in. Demo data is seeded
    here, before the app can serve anything, unless disabled in settings.
    """
    settings = settings or get_settings()
    repository = repository if repository is not None else FormRepository()
    if settings.seed_demo:
        repository.seed_demo()

    app = FastAPI(title="Form Builder", version="0.1.0")
    app.state.repository = repository
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(forms_router)
    app.add_exception_handler(FormNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidFormIdError, invalid_id_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def banner() -> str:
        return "Form builder backend is running"

    if settings.static_dir is not None:
        if settings.static_dir.is_dir():
            app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
        else:
            logger.warning("Static directory %s does not exist; not serving static files", settings.static_dir)

    return app


api = create_app()


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "formbuilder.main:api",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
