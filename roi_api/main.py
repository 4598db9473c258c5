# roi_api/main.py
# -----------------------------------------------------------------------------
# FastAPI entrypoint
# - create tables on startup, dispose the engine on shutdown
# - CORS, access log, error envelopes, Swagger UI under /{API_PREFIX}/docs
# -----------------------------------------------------------------------------
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded

from roi_api.core.config import settings
from roi_api.core.errors import CalculationNotFound, ComputationError, ValidationError
from roi_api.core.logging import setup_logging
from roi_api.core.rate_limit import limiter
from roi_api.db.session import Base, engine
from roi_api.routers import calculations, health

setup_logging()

API_ROOT = f"/{settings.API_PREFIX.strip('/')}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("CORS enabled for origin: {}", settings.CORS_ORIGIN)
    logger.info("Application is running on port {} under {}", settings.PORT, API_ROOT)
    logger.info("Swagger docs: {}/docs", API_ROOT)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="API for calculating serverless ROI",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url=f"{API_ROOT}/docs",
    redoc_url=None,
    openapi_url=f"{API_ROOT}/openapi.json",
)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.debug(
        "{} {} -> {} ({:.1f} ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


def _error(status_code: int, error: str, message: str, errors: dict | None = None, headers=None):
    body = {"success": False, "error": error, "message": message, "errors": errors or {}}
    return JSONResponse(body, status_code=status_code, headers=headers)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(400, "Bad Request", str(exc), exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        errors.setdefault(".".join(loc) or "body", err.get("msg", "Invalid value"))
    return _error(400, "Bad Request", "Invalid request", errors)


@app.exception_handler(CalculationNotFound)
async def not_found_handler(request: Request, exc: CalculationNotFound):
    return _error(404, "Not Found", str(exc))


@app.exception_handler(ComputationError)
async def computation_error_handler(request: Request, exc: ComputationError):
    logger.opt(exception=exc).error("ROI computation fault on {}", request.url.path)
    return _error(500, "Internal Server Error", "Calculation failed")


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate limit exceeded for {}", request.client.host if request.client else "?")
    return _error(
        429,
        "Too Many Requests",
        f"Rate limit exceeded: {exc.detail}",
        headers={"Retry-After": str(settings.RATE_LIMIT_TTL)},
    )


app.include_router(calculations.router, prefix=API_ROOT)
app.include_router(health.router)


@app.get(API_ROOT, tags=["meta"])
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "apiVersion": settings.API_VERSION,
        "environment": settings.ENV,
    }


def run() -> None:
    import uvicorn

    uvicorn.run("roi_api.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
