"""
Images Module - WebP variant generation for uploaded images

Every variant is re-encoded as WebP with EXIF orientation applied and all
metadata dropped. ``cover`` crops to the exact box, ``inside`` shrinks to
fit the box without ever enlarging, and a variant without a box keeps the
source dimensions.
"""

import io
from collections import namedtuple

from PIL import Image, ImageOps, UnidentifiedImageError


ImageVariant = namedtuple('ImageVariant', ['prefix', 'width', 'height', 'fit', 'quality'])

ORIGINAL = ImageVariant('orig', None, None, None, 90)

PROJECT_VARIANTS = (
    ImageVariant('thumb', 400, 300, 'cover', 80),
    ImageVariant('med', 800, 600, 'inside', 80),
    ImageVariant('lg', 1600, 1200, 'inside', 85),
    ORIGINAL,
)
HEADSHOT = ImageVariant('headshot', 400, 400, 'cover', 85)
COMPANY_LOGO = ImageVariant('company', 200, 200, 'inside', 85)
CERTIFICATION_BADGE = ImageVariant('badge', 200, 200, 'inside', 85)
BLOG_FEATURED = ImageVariant('featured', 1200, 630, 'cover', 85)

# Filename prefixes that mark a stored key as one of a set of variants
VARIANT_PREFIXES = ('thumb_', 'med_', 'lg_', 'orig_', 'featured_', 'headshot_', 'company_', 'badge_')

WEBP_CONTENT_TYPE = 'image/webp'


class InvalidImageError(Exception):
    pass


def _normalize_mode(img):
    if img.mode in ('RGB', 'RGBA'):
        return img
    if img.mode in ('P', 'LA', 'PA') or 'transparency' in img.info:
        return img.convert('RGBA')
    return img.convert('RGB')


def load_image(data):
    """Open image bytes, apply EXIF orientation and return a fresh RGB(A) copy"""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            return _normalize_mode(img)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError(f"Could not read image: {str(e)}") from e


def render_variant(img, variant):
    """Resize ``img`` for ``variant`` and encode it as WebP bytes"""
    if variant.fit == 'cover':
        out = ImageOps.fit(img, (variant.width, variant.height), Image.Resampling.LANCZOS)
    elif variant.fit == 'inside':
        out = img.copy()
        out.thumbnail((variant.width, variant.height), Image.Resampling.LANCZOS)
    else:
        out = img

    buffer = io.BytesIO()
    # Saving from raw pixels leaves EXIF/ICC/XMP behind
    out.save(buffer, format='WEBP', quality=variant.quality, method=4)
    return buffer.getvalue()


def process_image(data, variants):
    """Render each variant of ``data``; returns ``{prefix: webp_bytes}``"""
    img = load_image(data)
    return {variant.prefix: render_variant(img, variant) for variant in variants}


__all__ = [
    'ImageVariant',
    'ORIGINAL',
    'PROJECT_VARIANTS',
    'HEADSHOT',
    'COMPANY_LOGO',
    'CERTIFICATION_BADGE',
    'BLOG_FEATURED',
    'VARIANT_PREFIXES',
    'WEBP_CONTENT_TYPE',
    'InvalidImageError',
    'load_image',
    'render_variant',
    'process_image',
]
