import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import uvicorn

from config import cors_origins, log_level
from routers import auth, dashboard, keys, onboarding, payment_links, public
from services.errors import ConfigurationError, DomainError

# Load .env
load_dotenv()

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("byund")

# App instance
app = FastAPI(title="Byund API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message},
        headers={"Cache-Control": "no-store"},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error on %s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.response_message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Invalid input on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(400, "Invalid input")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(404, "Route not found")
    return error_response(exc.status_code, str(exc.detail))


@app.get("/api/health")
def health():
    return {"ok": True}


app.include_router(auth.router)
app.include_router(onboarding.router)
app.include_router(dashboard.router)
app.include_router(payment_links.router)
app.include_router(public.router)
app.include_router(keys.router)


# 500 Fallback Middleware
@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Something went wrong.")


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
