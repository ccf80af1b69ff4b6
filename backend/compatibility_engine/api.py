"""
HTTP endpoints for the compatibility engine.

Endpoints:
    POST /get_match_details - Per-category comparison of two users
    POST /get_matches - Top matches for one user
    OPTIONS on both - CORS preflight, always "ok"
    GET /health - Health check

Error responses are {"error": message, "code": code}: 400 for bad parameters,
404 for unknown profiles, 500 for anything else.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from backend.compatibility_engine.config import DatabaseSettings, ScoringConfig
from backend.compatibility_engine.errors import MISSING_PARAMETER, CompatibilityError, ValidationError
from backend.compatibility_engine.matchmaker_engine import MatchMakerEngine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

# Initialized at startup
engine: Optional[MatchMakerEngine] = None


# ids are opaque; numeric ids are turned into strings by the engine
UserId = Optional[Union[str, int]]


class MatchDetailsRequest(BaseModel):
    user_id: UserId = Field(None, description="Acting user")
    other_user_id: UserId = Field(None, description="User to compare against")


class MatchesRequest(BaseModel):
    user_id: UserId = Field(None, description="User to find matches for")


def build_repository(settings: DatabaseSettings):
    if settings.backend == "postgres":
        from backend.compatibility_engine.interfaces.db_interface import DatabaseInterface
        return DatabaseInterface.from_settings(settings)
    if settings.backend == "memory":
        from backend.compatibility_engine.interfaces.memory_repository import InMemoryInterestRepository
        return InMemoryInterestRepository()

    from backend.compatibility_engine.interfaces.supabase_repository import SupabaseInterestRepository
    return SupabaseInterestRepository.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global engine
    settings = DatabaseSettings.from_env()
    logger.info(f"Starting compatibility service with {settings.backend} backend...")

    try:
        engine = MatchMakerEngine(build_repository(settings), ScoringConfig.from_env())
    except Exception as e:
        logger.error(f"Failed to start compatibility service: {e}")
        raise

    yield

    logger.info("Shutting down compatibility service...")
    engine.repository.close()
    engine = None


app = FastAPI(
    title="Compatibility Service API",
    description="Interest-based compatibility scores between users",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = (time.time() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.1f}ms"
    )
    return response


@app.exception_handler(CompatibilityError)
async def compatibility_error_handler(request: Request, exc: CompatibilityError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.url.path} rejected malformed body: {exc.errors()}")
    error = ValidationError("Request body must be JSON with the required user ids", MISSING_PARAMETER)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def get_engine() -> MatchMakerEngine:
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Compatibility service is not initialized"
        )
    return engine


def _run(operation, *args):
    try:
        return operation(*args)
    except CompatibilityError:
        raise
    except Exception as e:
        logger.exception("Unhandled error")
        raise CompatibilityError(str(e)) from e


@app.options("/get_match_details")
@app.options("/get_matches")
def preflight():
    return PlainTextResponse("ok")


@app.post("/get_match_details")
def get_match_details(request: Optional[MatchDetailsRequest] = None, engine: MatchMakerEngine = Depends(get_engine)):
    request = request or MatchDetailsRequest()
    details = _run(engine.get_match_details, request.user_id, request.other_user_id)
    return details.to_dict()


@app.post("/get_matches")
def get_matches(request: Optional[MatchesRequest] = None, engine: MatchMakerEngine = Depends(get_engine)):
    request = request or MatchesRequest()
    matches = _run(engine.get_matches, request.user_id)
    return {"matches": [m.to_dict() for m in matches]}


@app.get("/health")
def health():
    return {"status": "healthy" if engine is not None else "starting"}
