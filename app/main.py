import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from app.api.routes import commentary, matches
from app.core.config import settings
from app.core.database import check_connection
from app.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast: an unreachable database stops the server from starting
    try:
        check_connection()
    except OperationalError as e:
        logger.critical("Cannot reach the database: %s", e.orig)
        raise
    yield


app = FastAPI(
    title="Matchday API",
    description="Matches and live commentary backend",
    version="1.0.0",
    lifespan=lifespan,
)

# --- 1. CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 2. ERROR HANDLING ---
register_exception_handlers(app)

# --- 3. ROUTES ---
app.include_router(matches.router, prefix="/matches", tags=["Matches"])
app.include_router(commentary.router, prefix="/matches", tags=["Commentary"])

@app.get("/")
def read_root():
    return {
        "status": "online",
        "project": "Matchday API",
        "docs": "Go to /docs to see the API"
    }

@app.get("/health")
def health():
    return {"status": "ok"}
