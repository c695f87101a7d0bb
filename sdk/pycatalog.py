# sdk/pycatalog.py
import base64
import mimetypes
import requests
import httpx
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from catalog.models import Product


def encode_image(path: str) -> str:
    """Read a local image file and return it as a data URL."""
    mime, _ = mimetypes.guess_type(path)
    if not mime or not mime.startswith("image/"):
        raise ValueError(f"not an image file: {path}")
    payload = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:{mime};base64,{payload}"


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8000", timeout: Optional[int] = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._opts = {"timeout": timeout} if timeout is not None else {}
        # anything with the requests.Session call signature works (tests pass a TestClient)
        self.session = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _payload(fields: Dict[str, Any], image_paths: Iterable[str]) -> Dict[str, Any]:
        payload = dict(fields)
        encoded = [encode_image(p) for p in image_paths]
        if encoded:
            payload["imagesBase64"] = encoded
        return payload

    # Products
    def list_products(self) -> List[Product]:
        r = self.session.get(self._url("/api/products"), **self._opts)
        r.raise_for_status()
        return [Product.model_validate(p) for p in r.json()]

    def get_product(self, product_id: str) -> Product:
        r = self.session.get(self._url(f"/api/products/{product_id}"), **self._opts)
        r.raise_for_status()
        return Product.model_validate(r.json())

    def create_product(self, fields: Dict[str, Any], image_paths: Iterable[str] = ()) -> Product:
        r = self.session.post(self._url("/api/products"), json=self._payload(fields, image_paths), **self._opts)
        r.raise_for_status()
        return Product.model_validate(r.json())

    def update_product(self, product_id: str, fields: Dict[str, Any], image_paths: Iterable[str] = ()) -> Product:
        r = self.session.put(
            self._url(f"/api/products/{product_id}"),
            json=self._payload(fields, image_paths),
            **self._opts,
        )
        r.raise_for_status()
        return Product.model_validate(r.json())

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), **self._opts)
        r.raise_for_status()
        return r.json()

    def categories(self) -> Dict[str, str]:
        r = self.session.get(self._url("/api/categories"), **self._opts)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(
        self,
        fields: Dict[str, Any],
        image_paths: Iterable[str] = (),
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Product:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.post("/api/products", json=self._payload(fields, image_paths))
            r.raise_for_status()
            return Product.model_validate(r.json())


if __name__ == "__main__":
    import argparse
    import json
    from rich import print

    parser = argparse.ArgumentParser(description="Catalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000", help="Catalog server URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--category", required=True, help="Category slug")
    cp.add_argument("--category-name", help="Human readable category name")
    cp.add_argument("--name", help="Product name")
    cp.add_argument("--price-from", type=float, help="Starting price")
    cp.add_argument("--id", help="Explicit product ID (generated when omitted)")
    cp.add_argument("--image", action="append", default=[], help="Image file to upload (repeatable)")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True, help="ID of the product")
    up.add_argument("--set", action="append", default=[], metavar="FIELD=JSON",
                    help="Field to overwrite; value parsed as JSON, else kept as text (repeatable)")
    up.add_argument("--image", action="append", default=[], help="Image file to append (repeatable)")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    subparsers.add_parser("categories", help="Show category slugs and names")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    if args.command == "list-products":
        for p in c.list_products():
            print(p.model_dump(exclude_none=True))

    elif args.command == "get-product":
        print(c.get_product(args.product_id).model_dump(exclude_none=True))

    elif args.command == "create-product":
        fields = {
            "id": args.id,
            "category": args.category,
            "category_name": args.category_name,
            "name": args.name,
            "price_from": args.price_from,
        }
        fields = {k: v for k, v in fields.items() if v is not None}
        print(c.create_product(fields, args.image).model_dump(exclude_none=True))

    elif args.command == "update-product":
        fields = {}
        for item in args.set:
            key, _, raw = item.partition("=")
            try:
                fields[key] = json.loads(raw)
            except ValueError:
                fields[key] = raw
        print(c.update_product(args.product_id, fields, args.image).model_dump(exclude_none=True))

    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))

    elif args.command == "categories":
        print(c.categories())
