import json

import pytest

from storefront.config import set_config_for_test
from storefront.data.backends.file_backend import FileCatalogAccess, find_repo_root
from storefront.data.interface import CatalogFormatError
from storefront.data.util import get_catalog_access


@pytest.fixture
def fixture_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({
        "products": [
            {"name": "Trail Runner", "product_image": {"url": "u1"}},
            {"name": "Court Classic", "product_image": {"url": "u2"}},
            {"name": "Trail Runner GTX", "product_image": {"url": "u3"}},
        ]
    }), encoding="utf-8")
    set_config_for_test(fixture_path=str(path), catalog_backend="file", log_level="INFO")
    return path


@pytest.mark.asyncio
async def test_catalog_returns_every_product_in_file_order(fixture_file):
    products = await FileCatalogAccess(fixture_file).fetch_catalog()
    assert [p.name for p in products.products] == ["Trail Runner", "Court Classic", "Trail Runner GTX"]


@pytest.mark.asyncio
async def test_search_matches_name_case_insensitively(fixture_file):
    products = await FileCatalogAccess(fixture_file).fetch_search("trail")
    assert [p.image_url for p in products.products] == ["u1", "u3"]


@pytest.mark.asyncio
async def test_empty_search_returns_catalog(fixture_file):
    access = FileCatalogAccess(fixture_file)
    assert await access.fetch_search("") == await access.fetch_catalog()


@pytest.mark.asyncio
async def test_broken_fixture_is_a_format_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogFormatError):
        await FileCatalogAccess(path).fetch_catalog()


def test_missing_fixture_fails_at_construction(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileCatalogAccess(tmp_path / "absent.json")


def test_factory_builds_file_backend_from_config(fixture_file):
    access = get_catalog_access()
    assert isinstance(access, FileCatalogAccess)
    assert access.path == fixture_file


def test_relative_path_resolves_from_repo_root(tmp_path, monkeypatch):
    """Running from a nested folder still finds the fixture next to pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
    data_dir = tmp_path / "sample_data"
    data_dir.mkdir()
    (data_dir / "products.json").write_text('{"products": []}', encoding="utf-8")
    nested = tmp_path / "storefront" / "pages"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    access = FileCatalogAccess("sample_data/products.json")

    assert access.path == data_dir / "products.json"


def test_find_repo_root_stops_at_nearest_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    inner = tmp_path / "a" / "b"
    inner.mkdir(parents=True)
    assert find_repo_root(inner) == tmp_path


@pytest.mark.asyncio
async def test_invalid_entries_are_skipped(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({
        "products": [
            {"name": "Good", "product_image": {"url": "u1"}},
            {"name": "No image", "product_image": None},
        ]
    }), encoding="utf-8")
    products = await FileCatalogAccess(path).fetch_catalog()
    assert [p.name for p in products.products] == ["Good"]
