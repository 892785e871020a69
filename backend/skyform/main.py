import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from skyform.config import settings
from skyform.db.session_store import close_session_store, get_session_store
from skyform.api.v1.router import api_router
from skyform.web.homepage import build_homepage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.rapidapi_key:
        logger.warning("RAPIDAPI_KEY is not configured: searches will fail")
    get_session_store()

    yield

    # Shutdown
    close_session_store()


app = FastAPI(
    title="SkyForm API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router)


@app.get("/", response_class=HTMLResponse)
async def home_page() -> HTMLResponse:
    return HTMLResponse(build_homepage())


@app.get("/api/v1/health")
async def health():
    return {
        "status": "ok",
        "env": settings.app_env,
        "flight_api_configured": bool(settings.rapidapi_key),
    }
