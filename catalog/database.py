import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .core import generate_id, is_blank, merge_product, save_base64_images

# This file holds the catalog store: one JSON array on disk, reloaded and
# rewritten in full by every operation.

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog failures."""


class ProductNotFound(CatalogError):
    def __init__(self, product_id: str):
        super().__init__(f"product not found: {product_id}")
        self.product_id = product_id


class ValidationFailed(CatalogError):
    pass


class StorageError(CatalogError):
    pass


class CatalogStore:
    def __init__(self, data_file: Path, images_dir: Path):
        self.data_file = Path(data_file)
        self.images_dir = Path(images_dir)

    # ---------------------------
    # Persistence
    # ---------------------------
    def _load(self) -> List[Dict[str, Any]]:
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                parsed = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to read catalog %s: %s", self.data_file, e)
            return []
        return parsed if isinstance(parsed, list) else []

    def _save(self, products: List[Dict[str, Any]]) -> None:
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.data_file, "w", encoding="utf-8") as f:
                json.dump(products, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error("Failed to write catalog %s: %s", self.data_file, e)
            raise StorageError(str(e)) from e

    @staticmethod
    def _index_of(products: List[Dict[str, Any]], product_id: str) -> int:
        for i, p in enumerate(products):
            if isinstance(p, dict) and p.get("id") == product_id:
                return i
        raise ProductNotFound(product_id)

    # ---------------------------
    # Operations
    # ---------------------------
    def list(self) -> List[Dict[str, Any]]:
        return self._load()

    def get(self, product_id: str) -> Dict[str, Any]:
        products = self._load()
        return products[self._index_of(products, product_id)]

    def insert(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not payload.get("category"):
            raise ValidationFailed("category is required")
        if payload.get("id") is not None and not isinstance(payload["id"], str):
            raise ValidationFailed("Invalid JSON")

        products = self._load()
        item = {k: v for k, v in payload.items() if k != "imagesBase64"}
        images = list(item["images"]) if isinstance(item.get("images"), list) else []
        images.extend(save_base64_images(payload.get("imagesBase64"), self.images_dir))
        item["images"] = images

        if is_blank(item.get("id")):
            item["id"] = generate_id(products, item["category"])

        products.append(item)
        self._save(products)
        logger.info("Inserted product %s", item["id"])
        return item

    def update(self, product_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        products = self._load()
        index = self._index_of(products, product_id)

        patch = dict(patch)
        patch["id"] = product_id
        new_images = save_base64_images(patch.get("imagesBase64"), self.images_dir)
        products[index] = merge_product(products[index], patch, new_images)

        self._save(products)
        logger.info("Updated product %s", product_id)
        return products[index]

    def delete(self, product_id: str) -> Dict[str, Any]:
        products = self._load()
        index = self._index_of(products, product_id)
        del products[index]
        self._save(products)
        logger.info("Deleted product %s", product_id)
        return {"ok": True}

    def categories(self) -> Dict[str, str]:
        """Slug -> label map derived from the records; later records win."""
        out: Dict[str, str] = {}
        for p in self._load():
            if isinstance(p, dict) and p.get("category") and p.get("category_name"):
                out[str(p["category"])] = p["category_name"]
        return out
