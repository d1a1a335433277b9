# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from . import db as db_module
from .exceptions import PizzaServiceError
from .logging_config import setup_logging
from .middleware import RequestIDMiddleware
from .routes import (
    auth_router,
    franchise_router,
    limiter,
    order_router,
    public_router,
    user_router,
)
from .seed import seed_all

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed an empty database before serving."""
    db_module.init_db()
    if config.SEED_ON_STARTUP:
        session = db_module.SessionLocal()
        try:
            seed_all(session)
        finally:
            session.close()
    logger.info("JWT Pizza Service %s ready", config.VERSION)
    yield


app = FastAPI(
    title="JWT Pizza Service",
    description="Pizza ordering API with franchise management",
    version=config.VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Registration, login, and logout"},
        {"name": "Users", "description": "User profiles"},
        {"name": "Franchises", "description": "Franchises and their stores"},
        {"name": "Orders", "description": "Menu and order placement"},
    ],
)


# ---------- Error Handlers ----------
# Every error reaches the client as {"message": ...}

@app.exception_handler(PizzaServiceError)
async def pizza_service_error_handler(request: Request, exc: PizzaServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"{field}: {first.get('msg', 'invalid value')}"
    else:
        message = "invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "unknown endpoint" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=429, content={"message": "too many requests"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "internal server error"})


# ---------- Middleware ----------

app.add_middleware(RequestIDMiddleware)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Routers ----------

app.include_router(public_router)
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(franchise_router)
app.include_router(order_router)
