from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import DEFAULT_APP_CONFIG, AppConfig
from .errors import InvalidInputError, UpstreamError
from .recipes.catalog import load_catalog
from .recipes.matcher import NO_FILTER, match_recipes
from .recipes.models import (
    FavoriteRequest,
    FavoritesResponse,
    IdentifyResponse,
    RateRequest,
    SuccessResponse,
    SuggestionsResponse,
)
from .recipes.normalizer import normalize_ingredients
from .recipes.suggestions import annotate_favorites, suggest_recipes
from .storage.config import DEFAULT_STORAGE_CONFIG
from .storage.ledger import Ledger, get_ledger
from .vision.clarifai_client import detect_concepts
from .vision.config import DEFAULT_VISION_CONFIG, VisionConfig

logger = logging.getLogger(__name__)


# ── Collaborators (overridable in tests) ─────────────────────────────────


def get_catalog_path() -> Path:
    return DEFAULT_STORAGE_CONFIG.catalog_path


def get_vision_config() -> VisionConfig:
    return DEFAULT_VISION_CONFIG


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


# ── Error handlers ───────────────────────────────────────────────────────


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        problems.append(f"{field}: {err.get('msg', 'invalid value')}")
    message = "; ".join(problems) or "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _server_error("Internal server error")


# ── Recipe endpoints ─────────────────────────────────────────────────────

router = APIRouter()


@router.post("/identify", response_model=IdentifyResponse)
def identify(
    image: UploadFile | None = File(default=None),
    ingredients: str | None = Form(default=None),
    dietary: str = Form(default=NO_FILTER),
    difficulty: str = Form(default=NO_FILTER),
    catalog_path: Path = Depends(get_catalog_path),
    vision_config: VisionConfig = Depends(get_vision_config),
    config: AppConfig = Depends(get_app_config),
):
    # 1. Recognise the uploaded image, if any
    labels: list[str] = []
    if image is not None:
        image_bytes = image.file.read()
        if image_bytes:
            try:
                labels = detect_concepts(image_bytes, vision_config)
            except UpstreamError:
                logger.exception("Error recognising image %r", image.filename)
                return _server_error("Error generating recipes")

    # 2. Merge typed + recognised ingredients (raises InvalidInputError -> 400)
    user_ingredients = normalize_ingredients(ingredients, labels)

    # 3. Score the catalog
    try:
        catalog = load_catalog(catalog_path)
    except UpstreamError:
        logger.exception("Error generating recipes")
        return _server_error("Error generating recipes")

    recipes = match_recipes(
        user_ingredients,
        catalog,
        dietary=dietary or NO_FILTER,
        difficulty=difficulty or NO_FILTER,
        limit=config.match_limit,
    )
    logger.info(
        "Identify: %d ingredients -> %d recipes (top %s%%)",
        len(user_ingredients),
        len(recipes),
        recipes[0].match_percentage if recipes else 0,
    )
    return IdentifyResponse(ingredients=user_ingredients, recipes=recipes)


# ── Favorites / ratings endpoints ────────────────────────────────────────


@router.post("/favorite", response_model=SuccessResponse)
def add_favorite(body: FavoriteRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        ledger.add_favorite(body.recipe_id)
    except UpstreamError:
        logger.exception("Error adding favorite %s", body.recipe_id)
        return _server_error("Error updating favorites")
    return SuccessResponse()


@router.post("/remove-favorite", response_model=SuccessResponse)
def remove_favorite(body: FavoriteRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        ledger.remove_favorite(body.recipe_id)
    except UpstreamError:
        logger.exception("Error removing favorite %s", body.recipe_id)
        return _server_error("Error updating favorites")
    return SuccessResponse()


@router.get("/favorites", response_model=FavoritesResponse)
def favorites(
    ledger: Ledger = Depends(get_ledger),
    catalog_path: Path = Depends(get_catalog_path),
):
    try:
        catalog = load_catalog(catalog_path)
        favorite_recipes = annotate_favorites(
            catalog, ledger.get_favorites(), ledger.get_ratings(),
        )
    except UpstreamError:
        logger.exception("Error fetching favorites")
        return _server_error("Error fetching favorites")
    return FavoritesResponse(favorites=favorite_recipes)


@router.post("/rate", response_model=SuccessResponse)
def rate(body: RateRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        ledger.set_rating(body.recipe_id, body.rating)
    except UpstreamError:
        logger.exception("Error saving rating for %s", body.recipe_id)
        return _server_error("Error saving rating")
    return SuccessResponse()


# ── Suggestions (standalone profile only) ────────────────────────────────

suggestions_router = APIRouter()


@suggestions_router.get("/suggestions", response_model=SuggestionsResponse)
def suggestions(
    ledger: Ledger = Depends(get_ledger),
    catalog_path: Path = Depends(get_catalog_path),
    config: AppConfig = Depends(get_app_config),
):
    try:
        catalog = load_catalog(catalog_path)
        suggested = suggest_recipes(
            catalog,
            ledger.get_favorites(),
            ledger.get_ratings(),
            limit=config.suggestion_limit,
        )
    except UpstreamError:
        logger.exception("Error fetching suggestions")
        return _server_error("Error fetching suggestions")
    return SuggestionsResponse(suggestions=suggested)


# ── Service endpoints ────────────────────────────────────────────────────

service_router = APIRouter()


@service_router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@service_router.get("/")
def root() -> dict[str, str]:
    return {"message": "Smart Recipe Finder backend"}


def create_app(config: AppConfig = DEFAULT_APP_CONFIG) -> FastAPI:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(title=config.title, version="1.0.0")
    application.state.config = config
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(InvalidInputError, _invalid_input_handler)
    application.add_exception_handler(RequestValidationError, _validation_handler)
    application.add_exception_handler(Exception, _unhandled_handler)

    application.include_router(router, prefix=config.api_prefix)
    if config.enable_suggestions:
        application.include_router(suggestions_router, prefix=config.api_prefix)

    if config.static_dir is not None:
        # Bundled single-page app takes over "/"; health stays reachable.
        application.include_router(service_router, prefix=config.api_prefix)
        application.mount(
            "/", StaticFiles(directory=str(config.static_dir), html=True), name="static",
        )
    else:
        application.include_router(service_router)

    logger.info(
        "Recipe API ready (prefix=%r, suggestions=%s, static=%s)",
        config.api_prefix, config.enable_suggestions, config.static_dir,
    )
    return application


app = create_app()
