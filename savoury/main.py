"""Savoury FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from savoury import __version__
from savoury.auth.middleware import RouteGuardMiddleware
from savoury.auth.resolver import ApiUserResolver, CookieSessionAccessor
from savoury.config import settings
from savoury.exceptions import NotFoundError, PageNotFound, ServiceError
from savoury.models.common import ErrorDetail, ErrorResponse
from savoury.pages.rendering import render_page
from savoury.services import ApiClient, Services
from savoury.services.mail_service import Mailer
from savoury.services.search_service import SearchClient

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Construct external collaborators on startup and release them on shutdown."""
    logger.info("Starting Savoury web app...")
    api = ApiClient(base_url=settings.api_base_url, timeout=settings.api_timeout)
    services = Services.from_client(api)
    search = SearchClient(
        base_url=settings.elastic_url,
        index=settings.elastic_index,
        username=settings.elastic_username,
        password=settings.elastic_password,
        timeout=settings.api_timeout,
    )

    app.state.services = services
    app.state.search = search
    app.state.mailer = Mailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        support_address=settings.support_email,
    )
    app.state.session_accessor = CookieSessionAccessor()
    app.state.user_resolver = ApiUserResolver(services.user)
    if not app.state.mailer.configured:
        logger.warning("Mail transport not configured; contact form is disabled")

    logger.info("Savoury ready (api=%s)", settings.api_base_url)
    yield

    await search.close()
    await api.close()
    logger.info("Savoury stopped")


app = FastAPI(
    title="Savoury",
    description="Your Modern Food Recipe Sharing Platform",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RouteGuardMiddleware)


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


def _json_error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _retry_url(request: Request) -> str:
    return str(request.url) if request.method == "GET" else request.headers.get("referer", "/")


def _not_found(request: Request, title: str, message: str):
    if _wants_json(request):
        return _json_error(404, "NOT_FOUND", message)
    return render_page(request, "boundaries/not_found.html", title=title, message=message, status_code=404)


@app.exception_handler(PageNotFound)
async def page_not_found_handler(request: Request, exc: PageNotFound):
    return _not_found(request, exc.title, exc.message)


@app.exception_handler(NotFoundError)
async def upstream_not_found_handler(request: Request, exc: NotFoundError):
    return _not_found(request, "Not Found", exc.message)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Error boundary: show the failure and offer a retry of the same URL."""
    status_code = exc.status_code if exc.status_code and exc.status_code >= 400 else 502
    logger.error("Service failure on %s: %s", request.url.path, exc.message)
    if _wants_json(request):
        return _json_error(status_code, "SERVICE_ERROR", exc.message)
    return render_page(
        request,
        "boundaries/error.html",
        title="Something went wrong",
        message=exc.message or "An unexpected error occurred.",
        retry_url=_retry_url(request),
        status_code=status_code,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _not_found(request, "Not Found", "Sorry, we couldn't find the page you're looking for.")
    if _wants_json(request):
        return _json_error(exc.status_code, "HTTP_ERROR", str(exc.detail))
    response = render_page(
        request,
        "boundaries/error.html",
        title="Something went wrong",
        message=str(exc.detail),
        retry_url=_retry_url(request),
        status_code=exc.status_code,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


# Import and register routers
from savoury.pages.public import router as public_router
from savoury.pages.feed import router as feed_router
from savoury.pages.account import router as account_router

app.include_router(public_router)
app.include_router(feed_router)
app.include_router(account_router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "savoury", "version": __version__}


@app.get("/manifest.webmanifest")
async def manifest():
    return JSONResponse(
        {
            "name": "Savoury",
            "description": "Your Modern Food Recipe Sharing Platform",
            "start_url": "/",
            "display": "standalone",
            "icons": [{"src": "/favicon.ico", "sizes": "any", "type": "image/x-icon"}],
        },
        media_type="application/manifest+json",
    )
