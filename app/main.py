import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.logging_config import configure_logging
from routers import articles, headlines, health, images, ratings, search
from routers.responses import invalid_body
from services.completion_client import CompletionClient
from services.market_data import BenzingaClient

logger = logging.getLogger(__name__)


def _build_completion_client(settings: Settings) -> CompletionClient | None:
    if not settings.openai_api_key:
        logger.warning("NEWSDESK_OPENAI_API_KEY is not set; generation endpoints will fail")
        return None
    return CompletionClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
    )


def _build_gemini_client(settings: Settings) -> CompletionClient | None:
    if not settings.gemini_api_key:
        return None
    return CompletionClient(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout=settings.openai_timeout,
    )


def _build_market_data_client(settings: Settings) -> BenzingaClient | None:
    if not settings.benzinga_api_key:
        logger.warning("NEWSDESK_BENZINGA_API_KEY is not set; analyst ratings will fail")
        return None
    return BenzingaClient(
        api_key=settings.benzinga_api_key,
        base_url=settings.benzinga_base_url,
        timeout=settings.benzinga_timeout,
        lookback=settings.ratings_lookback,
        news_url=settings.benzinga_news_url,
    )


def create_app(
    settings: Settings | None = None,
    completion_client: CompletionClient | None = None,
    gemini_client: CompletionClient | None = None,
    market_data_client: BenzingaClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    docs_url = "/docs" if settings.enable_docs else None
    redoc_url = "/redoc" if settings.enable_docs else None
    openapi_url = "/openapi.json" if settings.enable_docs else None
    app = FastAPI(
        title=settings.project_name,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
    )

    app.state.settings = settings
    app.state.completion_client = completion_client or _build_completion_client(settings)
    app.state.gemini_client = gemini_client or _build_gemini_client(settings)
    app.state.market_data_client = market_data_client or _build_market_data_client(settings)

    if settings.environment == "production":
        app.add_middleware(HTTPSRedirectMiddleware)

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.allowed_hosts,
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(_: Request, exc: RateLimitExceeded) -> JSONResponse:
        return JSONResponse(status_code=429, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        response_model = getattr(route, "response_model", None)
        if response_model is None:
            return await request_validation_exception_handler(request, exc)
        logger.warning("Rejected malformed request body for %s: %s", request.url.path, exc.errors())
        return invalid_body(response_model)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):  # type: ignore[no-untyped-def]
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["X-XSS-Protection"] = "0"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        response.headers["Content-Security-Policy"] = "default-src 'self'"
        return response

    app.include_router(health.router)
    app.include_router(headlines.router, prefix=settings.api_prefix)
    app.include_router(articles.router, prefix=settings.api_prefix)
    app.include_router(images.router, prefix=settings.api_prefix)
    app.include_router(ratings.router, prefix=settings.api_prefix)
    app.include_router(search.router, prefix=settings.api_prefix)
    return app
