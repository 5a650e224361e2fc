import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from studyassistant.middleware.ratelimit import RateLimitMiddleware, RateLimitRule, make_key_func
from studyassistant.config import settings
from studyassistant.db.session import init_db
from studyassistant.errors import AppError
from studyassistant.services import Services, build_services
from studyassistant.auth.routes import router as auth_router
from studyassistant.lectures.routes import router as lectures_router
from studyassistant.flashcards.routes import router as flashcards_router
from studyassistant.quizzes.routes import router as quizzes_router
from studyassistant.admin.routes import router as admin_router

logger = logging.getLogger(__name__)

def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

def _register_error_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.error_code}: {exc.message} {exc.context}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = [
            {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "VALIDATION_ERROR", "message": "Validation Error", "fields": fields},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "INTERNAL_ERROR", "message": "Server Error"},
        )

def rate_limit_rules(prefix: str) -> list[RateLimitRule]:
    window = settings.rate_limit_window_seconds
    return [
        RateLimitRule("api", (prefix,), window, settings.rate_limit_max_calls,
                      exclude_prefixes=(f"{prefix}/health",)),
        RateLimitRule(
            "generation",
            (f"{prefix}/lectures/upload", f"{prefix}/flashcards/generate", f"{prefix}/quizzes/generate"),
            window,
            settings.generation_rate_limit_max_calls,
        ),
    ]

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

def create_app(services: Services | None = None) -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.services = services or build_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.api_prefix
    app.add_middleware(
        RateLimitMiddleware,
        rules=rate_limit_rules(prefix),
        key_func=make_key_func(settings.secret_key),
    )
    _register_error_handlers(app)

    app.include_router(auth_router, prefix=prefix)
    app.include_router(lectures_router, prefix=prefix)
    app.include_router(flashcards_router, prefix=prefix)
    app.include_router(quizzes_router, prefix=prefix)
    app.include_router(admin_router, prefix=prefix)

    @app.get(f"{prefix}/health", tags=["root"])
    def health():
        return {"status": "ok", "message": "Server is running"}

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
