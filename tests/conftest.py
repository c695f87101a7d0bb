# tests/conftest.py
import base64

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings, get_settings
from catalog.main import app


@pytest.fixture
def settings(tmp_path):
    public = tmp_path / "public"
    (public / "data").mkdir(parents=True)
    (public / "data" / "products.json").write_text("[]", encoding="utf-8")
    (public / "index.html").write_text("<h1>Fabula</h1>", encoding="utf-8")
    return Settings(PUBLIC_DIR=public)


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def png_data_url(png_bytes):
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
