# main.py
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, ErrorMessage
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from core.similarity import DegenerateVector, DimensionMismatch, FingerprintError
from fastapi.responses import JSONResponse
from model.api import ErrorResponse
from util.constants import InternalURIs
from util.errors import AppError
from util.logger import init_logger
import logging

logger = logging.getLogger(__name__)


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        if settings.RATE_LIMIT_ENABLED:
            await FastAPILimiter.init(redis, identifier=_real_ip)
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    resp = _error(429, "rate_limited", "Too many requests. Try again in 60s.")
    resp.headers["Retry-After"] = "60"
    return resp


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error(exc.status_code, exc.code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    # Report the first failing field, e.g. "id: String should have at most 100 characters"
    errors = exc.errors()
    message = ErrorMessage.VALIDATION_ERROR.value.message
    if errors:
        first = errors[0]
        loc = ".".join(str(x) for x in first.get("loc", []) if x != "body")
        message = f"{loc}: {first.get('msg', message)}" if loc else first.get("msg", message)
    info = ErrorMessage.VALIDATION_ERROR.value
    return _error(info.http_status, info.code, message)


@app.exception_handler(FingerprintError)
async def fingerprint_error_handler(request: Request, exc: FingerprintError):
    if isinstance(exc, DimensionMismatch):
        info = ErrorMessage.DIMENSION_MISMATCH.value
    elif isinstance(exc, DegenerateVector):
        info = ErrorMessage.DEGENERATE_VECTOR.value
    else:
        info = ErrorMessage.INTERNAL_ERROR.value
    logger.error("fingerprint.fault path=%s err=%s", request.url.path, exc)
    return _error(info.http_status, info.code, info.message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled.error path=%s err=%s", request.url.path, type(exc).__name__, exc_info=exc
    )
    info = ErrorMessage.INTERNAL_ERROR.value
    return _error(info.http_status, info.code, info.message)


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
