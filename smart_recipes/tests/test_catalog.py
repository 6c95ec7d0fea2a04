from pathlib import Path

import pytest

from smart_recipes.errors import CatalogError
from smart_recipes.recipes.catalog import load_catalog
from smart_recipes.storage.config import DEFAULT_STORAGE_CONFIG


def test_load_catalog(catalog_path: Path):
    recipes = load_catalog(catalog_path)
    assert len(recipes) == 6
    assert recipes[0].name == "Omelette"
    assert recipes[5].model_dump()["cookingTime"] == 30


def test_defaults_for_missing_tags(tmp_path: Path):
    path = tmp_path / "recipes.json"
    path.write_text('[{"id": "a", "name": "Toast", "ingredients": ["bread"]}]', encoding="utf-8")
    recipe = load_catalog(path)[0]
    assert recipe.dietary == "none"
    assert recipe.difficulty == "none"


def test_missing_catalog_raises(tmp_path: Path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "nope.json")


def test_malformed_catalog_raises(tmp_path: Path):
    path = tmp_path / "recipes.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_invalid_records_raise(tmp_path: Path):
    path = tmp_path / "recipes.json"
    path.write_text('[{"name": "No id"}]', encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_bundled_catalog_loads():
    recipes = load_catalog(DEFAULT_STORAGE_CONFIG.catalog_path)
    assert recipes
    assert len({r.id for r in recipes}) == len(recipes)


def test_invalid_utf8_catalog_raises(tmp_path: Path):
    path = tmp_path / "recipes.json"
    path.write_bytes(b'[{"id": 1, "name": "\xff", "ingredients": ["egg"]}]')
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_null_tags_read_as_none(tmp_path: Path):
    path = tmp_path / "recipes.json"
    path.write_text(
        '[{"id": 1, "name": "Toast", "ingredients": ["bread"], "dietary": null, "difficulty": null}]',
        encoding="utf-8",
    )
    recipe = load_catalog(path)[0]
    assert recipe.dietary == "none"
    assert recipe.difficulty == "none"
