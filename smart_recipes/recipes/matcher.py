from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import pandas as pd

from .models import MatchResult, Recipe
from .normalizer import normalize_label

logger = logging.getLogger(__name__)

NO_FILTER = "none"
DEFAULT_MATCH_LIMIT = 10


def _catalog_frame(catalog: list[Recipe]) -> pd.DataFrame:
    """Tabulate the fields the matcher filters and scores on."""
    return pd.DataFrame({
        "position": range(len(catalog)),
        "dietary": [r.dietary for r in catalog],
        "difficulty": [r.difficulty for r in catalog],
        "ingredients_lower": pd.Series(
            [[normalize_label(i) for i in r.ingredients] for r in catalog], dtype=object,
        ),
    })


def match_percentage(matched: int, total: int) -> int:
    """Percentage of a recipe's ingredients the user has, rounded half up."""
    if total == 0:
        return 0
    return int(math.floor(matched * 100 / total + 0.5))


def score_ingredients(
    recipe_ingredients: list[str],
    user_ingredients: set[str],
) -> tuple[list[str], list[str], int]:
    """
    Split a lowercased ingredient list into (matched, missing, percentage).

    Each user ingredient counts once even if the recipe repeats it; the
    percentage is still taken over the recipe's full ingredient list.
    """
    matched = list(dict.fromkeys(i for i in recipe_ingredients if i in user_ingredients))
    missing = [i for i in recipe_ingredients if i not in user_ingredients]
    return matched, missing, match_percentage(len(matched), len(recipe_ingredients))


def _is_filter(value: str | None) -> bool:
    return bool(value) and value != NO_FILTER


def match_recipes(
    ingredients: Iterable[str],
    catalog: list[Recipe],
    dietary: str | None = NO_FILTER,
    difficulty: str | None = NO_FILTER,
    limit: int = DEFAULT_MATCH_LIMIT,
) -> list[MatchResult]:
    """
    Rank catalog recipes by how many of their ingredients the user already has.

    Dietary and difficulty filters are exact tag matches; ``"none"`` (or an
    empty value) disables a filter. Results are ordered by match percentage,
    ties keep catalog order, and at most ``limit`` are returned.
    """
    user = {normalize_label(i) for i in ingredients}
    df = _catalog_frame(catalog)

    # --- Hard filters ---
    mask = pd.Series(True, index=df.index)
    if _is_filter(dietary):
        mask = mask & (df["dietary"] == dietary)
    if _is_filter(difficulty):
        mask = mask & (df["difficulty"] == difficulty)

    candidates = df.loc[mask].copy()
    logger.debug(
        "Matching %d ingredients against %d/%d recipes (dietary=%s, difficulty=%s)",
        len(user), len(candidates), len(df), dietary, difficulty,
    )
    if candidates.empty:
        return []

    # --- Scoring ---
    scored = candidates["ingredients_lower"].apply(score_ingredients, user_ingredients=user)
    candidates["_scored"] = scored
    candidates["_pct"] = scored.map(lambda s: s[2]).astype(int)

    top = candidates.sort_values("_pct", ascending=False, kind="stable").head(limit)

    results: list[MatchResult] = []
    for _, row in top.iterrows():
        recipe = catalog[int(row["position"])]
        matched, missing, pct = row["_scored"]
        results.append(MatchResult.model_validate({
            **recipe.model_dump(),
            "matched_ingredients": matched,
            "missing_ingredients": missing,
            "match_percentage": pct,
        }))
    return results
