import logging
import uuid

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.rate_limiter import limit_for_path, rate_limiter
from app.database import init_db, engine
from app.logging_config import request_id_var, setup_logging
from app.routers import jobs, profile, recommendations, resume

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_JWT_SECRET = "replace-with-your-auth-jwt-secret"
REQUEST_ID_HEADER = "X-Request-ID"

app = FastAPI(
    title="Career Coach API",
    description="Resume analysis, multi-board job search, job tracking and career recommendations.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile.router)
app.include_router(resume.router)
app.include_router(jobs.router)
app.include_router(recommendations.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    limit = limit_for_path(path, settings.rate_limit_ai_per_min, settings.rate_limit_search_per_min)
    if request.method == "OPTIONS" or not limit or limit <= 0:
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    decision = rate_limiter.hit(f"{client_ip}:{path}", limit)
    if not decision.allowed:
        logger.warning("Rate limit hit: client=%s path=%s", client_ip, path)
        return JSONResponse(
            status_code=429,
            content={"detail": "Too many requests. Please retry shortly."},
            headers={"Retry-After": str(decision.retry_after)},
        )

    response = await call_next(request)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
    return response


@app.middleware("http")
async def bind_request_id(request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


def check_deployment_secrets() -> None:
    """Refuse placeholder secrets in production; warn about them elsewhere."""
    env = (settings.app_env or "development").lower()
    problems = []
    if settings.auth_jwt_secret == PLACEHOLDER_JWT_SECRET:
        problems.append("AUTH_JWT_SECRET placeholder is in use")
    if "username:password@" in settings.database_url:
        problems.append("DATABASE_URL appears to use placeholder credentials")
    if env in {"production", "prod"}:
        if problems:
            raise RuntimeError("; ".join(problems) + " (not allowed in production)")
    else:
        for problem in problems:
            logger.warning("%s. Set it in .env for secure deployments.", problem)


@app.on_event("startup")
def on_startup():
    logger.info("Starting Career Coach API")
    check_deployment_secrets()
    init_db()


@app.get("/")
def root():
    return {"message": "Career Coach API. See /docs for the available endpoints."}
