from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from smart_recipes.app import create_app, get_catalog_path, get_vision_config
from smart_recipes.config import AppConfig, spa_profile
from smart_recipes.recipes.models import Recipe
from smart_recipes.storage.ledger import Ledger, get_ledger
from smart_recipes.storage.store import JsonFileStore
from smart_recipes.vision.config import VisionConfig

SAMPLE_RECIPES = [
    {"id": 1, "name": "Omelette", "ingredients": ["Egg", "Milk"], "dietary": "none", "difficulty": "easy"},
    {"id": 2, "name": "Pancakes", "ingredients": ["egg", "milk", "flour", "butter"], "dietary": "vegetarian", "difficulty": "easy"},
    {"id": 3, "name": "Caprese", "ingredients": ["Tomato", "Mozzarella", "Basil"], "dietary": "vegetarian", "difficulty": "easy"},
    {"id": 4, "name": "Stir Fry", "ingredients": ["chicken", "rice", "onion", "garlic"], "dietary": "none", "difficulty": "medium"},
    {"id": 5, "name": "Risotto", "ingredients": ["rice", "mushroom", "onion", "butter"], "dietary": "vegetarian", "difficulty": "hard"},
    {"id": 6, "name": "Tomato Soup", "ingredients": ["tomato", "onion", "garlic"], "dietary": "vegan", "difficulty": "easy", "cookingTime": 30},
]


@pytest.fixture
def sample_catalog() -> list[Recipe]:
    return [Recipe.model_validate(r) for r in SAMPLE_RECIPES]


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(SAMPLE_RECIPES), encoding="utf-8")
    return path


@pytest.fixture
def ledger_dir(tmp_path: Path) -> Path:
    return tmp_path / "ledger"


@pytest.fixture
def ledger(ledger_dir: Path) -> Ledger:
    return Ledger(JsonFileStore(ledger_dir))


def _build_client(config: AppConfig, catalog_path: Path, ledger: Ledger) -> TestClient:
    app = create_app(config)
    app.dependency_overrides[get_catalog_path] = lambda: catalog_path
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_vision_config] = lambda: VisionConfig(api_key="test-key")
    return TestClient(app)


@pytest.fixture
def client(catalog_path: Path, ledger: Ledger) -> TestClient:
    return _build_client(AppConfig(api_prefix="", enable_suggestions=True, static_dir=None), catalog_path, ledger)


@pytest.fixture
def spa_client(tmp_path: Path, catalog_path: Path, ledger: Ledger) -> TestClient:
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html><body>Recipe Finder</body></html>", encoding="utf-8")
    return _build_client(spa_profile(static_dir), catalog_path, ledger)


@pytest.fixture
def prefixed_client(catalog_path: Path, ledger: Ledger) -> TestClient:
    return _build_client(AppConfig(api_prefix="/api", enable_suggestions=True, static_dir=None), catalog_path, ledger)
