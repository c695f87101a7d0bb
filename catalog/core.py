import base64
import binascii
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DATA_URL_RE = re.compile(r"^data:(image/([a-zA-Z0-9+.-]+));base64,(.+)$")
IMAGES_PREFIX = "images"

# ---------------------------
# Record helpers
# ---------------------------
def generate_id(products: List[Dict[str, Any]], category: Any) -> str:
    """
    Next id for a category: "<lowercased category>-<max suffix + 1>".
    Only records of the same category whose id carries the prefix count.
    """
    prefix = str(category).lower() + "-"
    highest = 0
    for p in products:
        if not isinstance(p, dict) or p.get("category") != category:
            continue
        pid = p.get("id")
        if not isinstance(pid, str) or not pid.startswith(prefix):
            continue
        digits = re.match(r"\d+", pid[len(prefix):])
        num = int(digits.group()) if digits else 0
        if num > highest:
            highest = num
    return f"{prefix}{highest + 1}"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def merge_product(existing: Dict[str, Any], patch: Dict[str, Any], new_images: List[str]) -> Dict[str, Any]:
    # images from the patch win over the stored list; uploads are appended
    if isinstance(patch.get("images"), list):
        images = list(patch["images"])
    elif isinstance(existing.get("images"), list):
        images = list(existing["images"])
    else:
        images = []
    images.extend(new_images)

    merged = dict(existing)
    merged.update({k: v for k, v in patch.items() if k != "imagesBase64"})
    merged["images"] = images
    return merged


# ---------------------------
# Image persistence
# ---------------------------
def _image_filename(ext: str) -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{ext}"


def save_base64_images(data_urls: Any, images_dir: Path) -> List[str]:
    """
    Decode data URLs (data:image/<subtype>;base64,<payload>) into files under
    images_dir and return their relative paths ("images/<name>").

    Entries that are not image data URLs are skipped silently. Undecodable
    payloads and failed writes are logged and skipped.
    """
    saved: List[str] = []
    if not isinstance(data_urls, list):
        return saved

    for data_url in data_urls:
        if not isinstance(data_url, str):
            continue
        match = DATA_URL_RE.match(data_url)
        if not match:
            continue
        ext = match.group(2).lower()
        if ext == "jpeg":
            ext = "jpg"
        try:
            payload = match.group(3)
            # unpadded payloads are accepted
            content = base64.b64decode(payload + "=" * (-len(payload) % 4))
        except (binascii.Error, ValueError) as e:
            logger.warning("Skipping image with bad base64 payload: %s", e)
            continue

        filename = _image_filename(ext)
        try:
            images_dir.mkdir(parents=True, exist_ok=True)
            (images_dir / filename).write_bytes(content)
        except OSError as e:
            logger.error("Failed to write image %s: %s", filename, e)
            continue
        saved.append(f"{IMAGES_PREFIX}/{filename}")

    return saved
