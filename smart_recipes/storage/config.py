from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class StorageConfig:
    """
    Where the read-only catalog and the writable ledger documents live.

    The bundled catalog ships inside the package; favorites and ratings are
    written to the working directory unless ``RECIPES_DATA_DIR`` says otherwise.
    """

    catalog_dir: Path = Path(os.getenv("RECIPES_CATALOG_DIR", str(_PACKAGE_DATA_DIR)))
    ledger_dir: Path = Path(os.getenv("RECIPES_DATA_DIR", "."))
    catalog_filename: str = "recipes.json"
    favorites_key: str = "favorites"
    ratings_key: str = "ratings"

    @property
    def catalog_path(self) -> Path:
        return self.catalog_dir / self.catalog_filename


DEFAULT_STORAGE_CONFIG = StorageConfig()
