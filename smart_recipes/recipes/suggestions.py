from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..storage.ledger import RecipeId, id_key
from .models import FavoriteRecipe, Recipe, SuggestionResult
from .normalizer import normalize_label

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5


def _ingredient_set(recipe: Recipe) -> set[str]:
    return {normalize_label(i) for i in recipe.ingredients if i.strip()}


def annotate_favorites(
    catalog: list[Recipe],
    favorites: Iterable[RecipeId],
    ratings: Mapping[str, float],
) -> list[FavoriteRecipe]:
    """Favorited catalog recipes, in catalog order, each with its rating (0 if unrated)."""
    favorite_keys = {id_key(f) for f in favorites}
    return [
        FavoriteRecipe.model_validate({
            **recipe.model_dump(),
            "rating": ratings.get(id_key(recipe.id), 0),
        })
        for recipe in catalog
        if id_key(recipe.id) in favorite_keys
    ]


def suggest_recipes(
    catalog: list[Recipe],
    favorites: Iterable[RecipeId],
    ratings: Mapping[str, float],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[SuggestionResult]:
    """
    Recommend non-favorited recipes that share ingredients with the favorites.

    Ingredient overlap is counted case-insensitively. When a recipe overlaps
    several favorites, its best (largest) overlap is kept. Ranking is overlap
    first, then rating, then catalog order.
    """
    favorite_keys = {id_key(f) for f in favorites}
    favorite_sets = [_ingredient_set(r) for r in catalog if id_key(r.id) in favorite_keys]
    if not favorite_sets:
        return []

    best: dict[str, tuple[int, int, Recipe]] = {}
    for position, recipe in enumerate(catalog):
        key = id_key(recipe.id)
        if key in favorite_keys or key in best:
            continue
        ingredients = _ingredient_set(recipe)
        common = max(len(ingredients & fav) for fav in favorite_sets)
        if common > 0:
            best[key] = (common, position, recipe)

    ranked = sorted(
        best.values(),
        key=lambda item: (-item[0], -ratings.get(id_key(item[2].id), 0), item[1]),
    )
    logger.debug(
        "%d candidate suggestions from %d favorites", len(ranked), len(favorite_sets),
    )

    return [
        SuggestionResult.model_validate({
            **recipe.model_dump(),
            "common_count": common,
            "rating": ratings.get(id_key(recipe.id), 0),
        })
        for common, _, recipe in ranked[:limit]
    ]
