"""Tests for WebP variant rendering."""
from __future__ import annotations

import io

import pytest
from PIL import Image

from utils.images import (
    BLOG_FEATURED, COMPANY_LOGO, HEADSHOT, ORIGINAL, PROJECT_VARIANTS,
    InvalidImageError, load_image, process_image, render_variant
)


def _encode(img, fmt="PNG", **params):
    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **params)
    return buffer.getvalue()


def _decode(data):
    return Image.open(io.BytesIO(data))


def test_project_variants_sizes():
    rendered = process_image(_encode(Image.new("RGB", (2400, 1800), "blue")), PROJECT_VARIANTS)

    sizes = {prefix: _decode(data).size for prefix, data in rendered.items()}
    assert sizes == {
        "thumb": (400, 300),
        "med": (800, 600),
        "lg": (1600, 1200),
        "orig": (2400, 1800),
    }


def test_inside_fit_never_enlarges():
    img = Image.new("RGB", (120, 80), "green")

    logo = _decode(render_variant(img, COMPANY_LOGO))

    assert logo.size == (120, 80)


def test_cover_fit_crops_to_exact_box():
    img = Image.new("RGB", (500, 1000), "green")

    assert _decode(render_variant(img, HEADSHOT)).size == (400, 400)
    assert _decode(render_variant(img, BLOG_FEATURED)).size == (1200, 630)


def test_output_is_webp():
    data = render_variant(Image.new("RGB", (10, 10)), ORIGINAL)

    assert _decode(data).format == "WEBP"


def test_exif_orientation_is_applied():
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 degrees clockwise on display
    data = _encode(Image.new("RGB", (300, 100), "red"), fmt="JPEG", exif=exif.tobytes())

    img = load_image(data)

    assert img.size == (100, 300)
    assert _decode(render_variant(img, ORIGINAL)).getexif().get(0x0112) is None


def test_palette_images_keep_transparency():
    img = Image.new("P", (20, 20))
    img.info["transparency"] = 0

    assert load_image(_encode(img)).mode == "RGBA"


def test_garbage_is_rejected():
    with pytest.raises(InvalidImageError):
        load_image(b"definitely not an image")
