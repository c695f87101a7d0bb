import json
from typing import Any, Dict, List

from starlette.requests import Request

from .database import CatalogStore

# This file contains the core logic for all API endpoints.


class MalformedRequest(Exception):
    pass


async def read_json_object(request: Request) -> Dict[str, Any]:
    # the whole body is read before parsing; payloads are small
    body = await request.body()
    try:
        data = json.loads(body)
    except ValueError:
        raise MalformedRequest("Invalid JSON")
    if not isinstance(data, dict):
        raise MalformedRequest("Invalid JSON")
    return data


# Product endpoints
async def list_products_logic(store: CatalogStore) -> List[Dict[str, Any]]:
    return store.list()

async def get_product_logic(store: CatalogStore, product_id: str) -> Dict[str, Any]:
    return store.get(product_id)

async def create_product_logic(store: CatalogStore, request: Request) -> Dict[str, Any]:
    payload = await read_json_object(request)
    return store.insert(payload)

async def update_product_logic(store: CatalogStore, product_id: str, request: Request) -> Dict[str, Any]:
    # unknown ids are reported before the body is looked at
    store.get(product_id)
    patch = await read_json_object(request)
    return store.update(product_id, patch)

async def delete_product_logic(store: CatalogStore, product_id: str) -> Dict[str, Any]:
    return store.delete(product_id)

# Categories
async def list_categories_logic(store: CatalogStore) -> Dict[str, str]:
    return store.categories()
