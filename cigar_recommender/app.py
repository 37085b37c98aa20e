from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .recommendations.config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .recommendations.errors import InvalidInputError, RecommenderError
from .recommendations.models import ErrorResponse, RecommendRequest, RecommendResponse
from .recommendations.service import get_recommendations

logger = logging.getLogger(__name__)

app = FastAPI(title="Cigar Recommendation API", version="1.0.0")

_STATIC_DIR = Path(__file__).resolve().parent / "static"

_HTTP_MESSAGES = {404: "Not found", 405: "Method not allowed"}


def get_llm_config() -> LLMConfig:
    return DEFAULT_LLM_CONFIG


def get_recommender_config() -> RecommenderConfig:
    return DEFAULT_RECOMMENDER_CONFIG


# ── Error handlers ───────────────────────────────────────────────────────
# Every failure goes out as {"error": "<message>"}.


@app.exception_handler(RecommenderError)
async def recommender_error_handler(request: Request, exc: RecommenderError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": InvalidInputError.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": RecommenderError.message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    "/recommend",
    response_model=RecommendResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 405, 500, 502)},
)
def recommend(
    body: RecommendRequest,
    config: RecommenderConfig = Depends(get_recommender_config),
    llm_config: LLMConfig = Depends(get_llm_config),
) -> RecommendResponse:
    return get_recommendations(
        body.cigar,
        body.avoid,
        config=config,
        llm_config=llm_config,
    )


# ── Static ───────────────────────────────────────────────────────────────


app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")


@app.get("/")
def root():
    return FileResponse(str(_STATIC_DIR / "index.html"))
