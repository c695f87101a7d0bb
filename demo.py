#!/usr/bin/env python
import base64
import tempfile
from pathlib import Path

from sdk.pycatalog import CatalogClient

# 1x1 transparent PNG
PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

def main():
    c = CatalogClient(base_url="http://127.0.0.1:8000")

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    vase = c.create_product({"category": "vases", "category_name": "Vases", "name": "Demo vase", "price_from": 450})
    lamp = c.create_product({"category": "lamps", "category_name": "Lamps", "name": "Demo lamp"})
    print(vase.id, lamp.id)

    # -----------------------------
    # Partial update
    # -----------------------------
    print("\nUpdating price of", vase.id)
    print(c.update_product(vase.id, {"price_from": 500}).model_dump(exclude_none=True))

    # -----------------------------
    # Upload an image
    # -----------------------------
    with tempfile.TemporaryDirectory() as tmp:
        image = Path(tmp) / "pixel.png"
        image.write_bytes(PIXEL_PNG)
        print("\nUploading image...")
        print(c.update_product(vase.id, {}, [str(image)]).images)

    # -----------------------------
    # Listing and categories
    # -----------------------------
    print("\nListing products...")
    for p in c.list_products():
        print(p.id, p.name)
    print("\nCategories:", c.categories())

    # -----------------------------
    # Clean up
    # -----------------------------
    print("\nDeleting demo products...")
    print(c.delete_product(vase.id))
    print(c.delete_product(lamp.id))

if __name__ == "__main__":
    main()
