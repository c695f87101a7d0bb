# tests/test_core.py
import base64
import logging
import re

from catalog.core import generate_id, merge_product, save_base64_images


def test_generate_id_empty_catalog():
    assert generate_id([], "vases") == "vases-1"
    assert generate_id([], "Vases") == "vases-1"


def test_generate_id_only_counts_same_category():
    products = [
        {"id": "vases-3", "category": "vases"},
        {"id": "vases-9", "category": "urns"},      # other category, ignored
        {"id": "custom", "category": "vases"},       # no prefix, ignored
        {"id": "vases-12abc", "category": "vases"},  # leading digits count
        {"id": "vases-", "category": "vases"},       # unparsable -> 0
    ]
    assert generate_id(products, "vases") == "vases-13"


def test_generate_id_mixed_case_category():
    products = [{"id": "vases-2", "category": "Vases"}]
    assert generate_id(products, "Vases") == "vases-3"
    assert generate_id(products, "vases") == "vases-1"


def test_merge_overwrites_present_fields_only():
    existing = {"id": "vases-1", "name": "Old", "material": "clay", "images": ["images/a.png"]}
    merged = merge_product(existing, {"id": "vases-1", "name": "New", "finish": None}, [])

    assert merged == {
        "id": "vases-1",
        "name": "New",
        "material": "clay",
        "finish": None,
        "images": ["images/a.png"],
    }
    assert existing["name"] == "Old"


def test_merge_image_sources():
    existing = {"id": "x", "images": ["images/a.png"]}
    assert merge_product(existing, {}, ["images/n.png"])["images"] == ["images/a.png", "images/n.png"]
    assert merge_product(existing, {"images": []}, ["images/n.png"])["images"] == ["images/n.png"]
    assert merge_product({"id": "x"}, {"images": "junk"}, [])["images"] == []
    assert "imagesBase64" not in merge_product(existing, {"imagesBase64": ["..."]}, [])


def test_save_images_keeps_input_order_and_skips_garbage(tmp_path, png_data_url):
    gif = "data:image/gif;base64,R0lGODlh"
    saved = save_base64_images(
        [png_data_url, "hello", None, "data:text/plain;base64,aGk=", gif],
        tmp_path / "images",
    )

    assert len(saved) == 2
    assert saved[0].endswith(".png")
    assert saved[1].endswith(".gif")
    for rel in saved:
        assert re.fullmatch(r"images/\d+-[0-9a-f]{8}\.(png|gif)", rel)
        assert (tmp_path / rel).is_file()


def test_save_images_normalizes_jpeg(tmp_path):
    saved = save_base64_images(["data:image/JPEG;base64,/9j/4AAQ"], tmp_path)
    assert saved[0].endswith(".jpg")


def test_save_images_non_list_input(tmp_path):
    assert save_base64_images(None, tmp_path) == []
    assert save_base64_images("data:image/png;base64,AAAA", tmp_path) == []


def test_save_images_accepts_unpadded_payload(tmp_path):
    unpadded = base64.b64encode(b"abcd").decode("ascii").rstrip("=")
    assert unpadded == "YWJjZA"

    saved = save_base64_images([f"data:image/png;base64,{unpadded}"], tmp_path / "images")
    assert len(saved) == 1
    assert (tmp_path / saved[0]).read_bytes() == b"abcd"


def test_save_images_bad_base64_is_logged(tmp_path, caplog):
    # a single data character cannot be decoded, padded or not
    with caplog.at_level(logging.WARNING, logger="catalog.core"):
        saved = save_base64_images(["data:image/png;base64,a"], tmp_path)
    assert saved == []
    assert "bad base64" in caplog.text


def test_save_images_write_failure_is_logged(tmp_path, png_data_url, caplog):
    blocker = tmp_path / "images"
    blocker.write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="catalog.core"):
        saved = save_base64_images([png_data_url], blocker)
    assert saved == []
    assert "Failed to write image" in caplog.text
