import logging
import os
import time

from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.db.init_db import init_db
from app.db.session import engine
from app.core.config import settings
from app.core.exception_handlers import register_exception_handlers
from app.api.v1.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("app.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    init_db(engine)
    os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
    logger.info("%s started", settings.PROJECT_NAME)
    yield
    engine.dispose()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        '%s "%s %s" %d %.1fms',
        request.client.host if request.client else "-",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)

# Movie posters; files are placed here by the admin tooling
app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False), name="uploads")


@app.get("/")
def read_root():
    return {"Hello": "Cinema"}
