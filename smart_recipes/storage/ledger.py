from __future__ import annotations

import logging

from .config import DEFAULT_STORAGE_CONFIG, StorageConfig
from .store import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

RecipeId = int | str


def id_key(recipe_id: RecipeId) -> str:
    """JSON object keys are strings, so ids are compared by their string form."""
    return str(recipe_id)


class Ledger:
    """Favorite set and rating map, kept as two independent documents."""

    def __init__(
        self,
        store: KeyValueStore,
        config: StorageConfig = DEFAULT_STORAGE_CONFIG,
    ) -> None:
        self.store = store
        self.favorites_key = config.favorites_key
        self.ratings_key = config.ratings_key

    # ── Favorites ────────────────────────────────────────────────────────

    def get_favorites(self) -> list[RecipeId]:
        return list(self.store.get(self.favorites_key, []))

    def add_favorite(self, recipe_id: RecipeId) -> list[RecipeId]:
        def _add(favorites: list[RecipeId]) -> list[RecipeId]:
            if id_key(recipe_id) not in {id_key(f) for f in favorites}:
                favorites.append(recipe_id)
            return favorites

        favorites = self.store.update(self.favorites_key, [], _add)
        logger.info("Favorite added: %s (total %d)", recipe_id, len(favorites))
        return favorites

    def remove_favorite(self, recipe_id: RecipeId) -> list[RecipeId]:
        key = id_key(recipe_id)
        favorites = self.store.update(
            self.favorites_key,
            [],
            lambda favs: [f for f in favs if id_key(f) != key],
        )
        logger.info("Favorite removed: %s (total %d)", recipe_id, len(favorites))
        return favorites

    # ── Ratings ──────────────────────────────────────────────────────────

    def get_ratings(self) -> dict[str, float]:
        return dict(self.store.get(self.ratings_key, {}))

    def rating_for(self, recipe_id: RecipeId) -> float:
        return self.get_ratings().get(id_key(recipe_id), 0)

    def set_rating(self, recipe_id: RecipeId, rating: float) -> dict[str, float]:
        def _upsert(ratings: dict[str, float]) -> dict[str, float]:
            ratings[id_key(recipe_id)] = rating
            return ratings

        ratings = self.store.update(self.ratings_key, {}, _upsert)
        logger.info("Rating saved: %s -> %s", recipe_id, rating)
        return ratings


# One store, and so one write lock, per process.
_ledger = Ledger(JsonFileStore(DEFAULT_STORAGE_CONFIG.ledger_dir))


def get_ledger() -> Ledger:
    """Return the process-wide ledger backed by JSON files."""
    return _ledger
