# path: bike-router-api/bike_router/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from bike_router.api.routes.routes import CONTEXT, router as routes_router
from bike_router.config import Settings, get_settings
from bike_router.dependencies import get_app_settings
from bike_router.utils.notifications import format_error_notification, send_notification

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="bike-router-api")

app.include_router(routes_router)


def _handler_settings(request: Request) -> Settings:
    # Exception handlers get no Depends; honour overrides the same way the router does.
    provider = request.app.dependency_overrides.get(get_app_settings, get_app_settings)
    return provider()


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected body on %s: %s", request.url.path, exc.errors())
    settings = _handler_settings(request)
    message = format_error_notification(Exception(f"invalid json: {exc}"), CONTEXT, settings)
    await run_in_threadpool(send_notification, message, settings)
    return JSONResponse(status_code=400, content={"detail": "invalid json"})


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    settings = _handler_settings(request)
    message = format_error_notification(Exception(f"invalid method: {request.method}"), CONTEXT, settings)
    await run_in_threadpool(send_notification, message, settings)
    return JSONResponse(status_code=405, content={"detail": "only POST allowed"}, headers=exc.headers)


@app.get("/")
def root():
    return {"message": "bike-router-api: POST /route with an origin and destination"}
