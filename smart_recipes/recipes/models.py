from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recipe(_CamelModel):
    """A catalog record. Unknown catalog fields are carried through untouched."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int | str
    name: str
    ingredients: list[str] = Field(default_factory=list)
    dietary: str = "none"
    difficulty: str = "none"

    @field_validator("dietary", "difficulty", mode="before")
    @classmethod
    def _null_tag_is_none(cls, value: str | None) -> str:
        return "none" if value is None else value


class MatchResult(Recipe):
    matched_ingredients: list[str]
    missing_ingredients: list[str]
    match_percentage: int = Field(..., ge=0, le=100)


class SuggestionResult(Recipe):
    common_count: int = Field(..., ge=1)
    rating: float = 0


class FavoriteRecipe(Recipe):
    rating: float = 0


# ── Request / response bodies ────────────────────────────────────────────


class FavoriteRequest(_CamelModel):
    recipe_id: int | str

    @field_validator("recipe_id")
    @classmethod
    def _not_blank(cls, value: int | str) -> int | str:
        if isinstance(value, str) and not value.strip():
            raise ValueError("recipeId must not be empty")
        return value


class RateRequest(FavoriteRequest):
    rating: float = Field(..., ge=0.0, le=5.0)


class IdentifyResponse(_CamelModel):
    ingredients: list[str]
    recipes: list[MatchResult]


class FavoritesResponse(_CamelModel):
    favorites: list[FavoriteRecipe]


class SuggestionsResponse(_CamelModel):
    suggestions: list[SuggestionResult]


class SuccessResponse(_CamelModel):
    success: bool = True
