from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..errors import CatalogError
from ..storage.config import DEFAULT_STORAGE_CONFIG
from .models import Recipe

logger = logging.getLogger(__name__)

_recipe_list = TypeAdapter(list[Recipe])


def load_catalog(path: Path = DEFAULT_STORAGE_CONFIG.catalog_path) -> list[Recipe]:
    """
    Read the whole recipe catalog from ``path``.

    The catalog is maintained outside this service, so it is re-read on every
    call and never cached or written. Any problem reading it is a
    :class:`CatalogError`.
    """
    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read recipe catalog {path}: {exc}") from exc

    try:
        recipes = _recipe_list.validate_python(raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid recipe catalog {path}: {exc}") from exc

    logger.debug("Loaded %d recipes from %s", len(recipes), path)
    return recipes