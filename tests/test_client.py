# tests/test_client.py
import asyncio

import httpx
import pytest

from catalog.main import app
from catalog.models import Product
from sdk.pycatalog import CatalogClient, encode_image


@pytest.fixture
def catalog_client(client):
    return CatalogClient(base_url="http://testserver", timeout=None, session=client)


@pytest.fixture
def image_file(tmp_path, png_bytes):
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)
    return path


def test_encode_image(image_file, png_data_url):
    assert encode_image(str(image_file)) == png_data_url


def test_encode_image_rejects_non_images(tmp_path):
    text = tmp_path / "notes.txt"
    text.write_text("hi", encoding="utf-8")
    with pytest.raises(ValueError):
        encode_image(str(text))


def test_client_crud(catalog_client, image_file):
    created = catalog_client.create_product(
        {"category": "vases", "category_name": "Vases", "name": "Test", "glaze": "matte"},
        [str(image_file)],
    )
    assert isinstance(created, Product)
    assert created.id == "vases-1"
    assert len(created.images) == 1
    # unknown fields survive the model
    assert created.model_dump()["glaze"] == "matte"

    updated = catalog_client.update_product("vases-1", {"price_from": 500})
    assert updated.price_from == 500
    assert updated.name == "Test"

    assert [p.id for p in catalog_client.list_products()] == ["vases-1"]
    assert catalog_client.get_product("vases-1") == updated
    assert catalog_client.categories() == {"vases": "Vases"}

    assert catalog_client.delete_product("vases-1") == {"ok": True}
    with pytest.raises(httpx.HTTPStatusError):
        catalog_client.get_product("vases-1")


def test_create_product_async(client):
    # `client` installs the settings override used by the ASGI app
    c = CatalogClient(base_url="http://test")
    created = asyncio.run(
        c.create_product_async({"category": "lamps"}, transport=httpx.ASGITransport(app=app))
    )
    assert created.id == "lamps-1"
