import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import applicant as applicant_api
from .api import auth as auth_api
from .api import files as files_api
from .api import job as job_api
from .api import resume as resume_api
from .api import submission as submission_api
from .config import FRONTEND_ORIGINS
from .database import init_db
from .utils.error_handlers import AppError, create_error_response, get_error_message

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return get_error_message("validation_error")
    first = errors[0]
    # loc is e.g. ("body", "email") or ("query", "page")
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    msg = first.get("msg") or get_error_message("validation_error")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("AppError on %s %s: %s", request.method, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message, exc.details or None)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _first_validation_message(exc)
        logger.warning("Rejected request %s %s: %s", request.method, request.url.path, message)
        return create_error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.detail,
                "status_code": exc.status_code,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(OperationalError)
    async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
        logger.exception("Database OperationalError: %s", exc)
        return create_error_response(503, get_error_message("database_error"))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("server_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        # Internal detail stays in the log.
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))


def create_app() -> FastAPI:
    app = FastAPI(title="TalentDesk")

    app.include_router(auth_api.router)
    app.include_router(job_api.router)
    app.include_router(submission_api.router)
    app.include_router(files_api.router)
    app.include_router(applicant_api.router)
    app.include_router(resume_api.router)

    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "Backend running", "service": "TalentDesk"}

    _default_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[*_default_origins, *FRONTEND_ORIGINS],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("Database ready")
