import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import config, database
from .exceptions import register_error_handlers
from .logging_config import setup_logging
from .routers import accounts, auth, designations, projects, requests, tasks

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger("taskhub.http")

database.init_db()

app = FastAPI(title=config.PROJECT_NAME, version=config.API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

UNLOGGED_PATHS = {"/", "/health"}


if config.ENABLE_HTTP_LOGGING:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        logger.info("-> %s %s from %s", request.method, path, client)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.exception("<- %s %s 500 - %.0fms", request.method, path, elapsed_ms)
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("<- %s %s %s - %.0fms", request.method, path, response.status_code, elapsed_ms)
        return response


# HEALTH
@app.get("/", tags=["health"])
@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(accounts.admin_router)
app.include_router(accounts.user_router)
app.include_router(designations.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(requests.router)
