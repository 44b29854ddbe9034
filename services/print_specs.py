# User value: This file holds per-product print requirements so artwork is checked against the product the user ordered.
import os
from types import MappingProxyType

from schemas.preflight import BleedRequirements, PrintSpecification

DEFAULT_PRODUCT_TYPE = "custom"

# Pixel dimensions are converted to inches at a fixed 72 px/inch.
PIXELS_PER_INCH = 72.0
DIMENSION_TOLERANCE = 0.10

DEFAULT_MAX_ARTWORK_FILE_SIZE_MB = 100
DEFAULT_RECOMMENDED_ARTWORK_FILE_SIZE_MB = 50


# Bad values fall back to the default here; startup_env reports them.
def env_positive_int(name: str, default: int) -> int:
    try:
        value = int(str(os.getenv(name, default)).strip())
    except ValueError:
        return default
    return value if value > 0 else default


MAX_ARTWORK_FILE_SIZE_MB = env_positive_int("MAX_ARTWORK_FILE_SIZE_MB", DEFAULT_MAX_ARTWORK_FILE_SIZE_MB)
RECOMMENDED_ARTWORK_FILE_SIZE_MB = env_positive_int(
    "RECOMMENDED_ARTWORK_FILE_SIZE_MB", DEFAULT_RECOMMENDED_ARTWORK_FILE_SIZE_MB
)

_STANDARD_BLEED = BleedRequirements(top=0.125, right=0.125, bottom=0.125, left=0.125)

PRINT_SPECS = MappingProxyType(
    {
        "sticker": PrintSpecification(
            width=4,
            height=4,
            min_dpi=150,
            max_dpi=600,
            recommended_dpi=300,
            bleed=_STANDARD_BLEED,
            allowed_formats=("pdf", "png", "jpg", "svg", "ai", "psd"),
            preferred_color_space="cmyk",
            requires_cmyk=False,
        ),
        "label": PrintSpecification(
            width=3,
            height=2,
            min_dpi=200,
            max_dpi=600,
            recommended_dpi=300,
            bleed=_STANDARD_BLEED,
            allowed_formats=("pdf", "png", "ai", "psd"),
            preferred_color_space="cmyk",
            requires_cmyk=True,
        ),
        "custom": PrintSpecification(
            width=6,
            height=6,
            min_dpi=150,
            max_dpi=1200,
            recommended_dpi=300,
            bleed=_STANDARD_BLEED,
            allowed_formats=("pdf", "png", "jpg", "svg", "ai", "psd"),
            preferred_color_space="cmyk",
            requires_cmyk=False,
        ),
    }
)

# Global rules used by the discrete print-ready score, independent of product type.
VALIDATION_RULES = MappingProxyType(
    {
        "min_dpi": 300,
        "min_dpi_warning": 250,
        "max_file_size": MAX_ARTWORK_FILE_SIZE_MB * 1024 * 1024,
        "recommended_max_size": RECOMMENDED_ARTWORK_FILE_SIZE_MB * 1024 * 1024,
        "acceptable_color_modes": ("rgb", "cmyk", "grayscale"),
        "acceptable_formats": ("pdf", "png", "jpg", "ai", "psd", "eps", "svg", "tiff"),
        "preferred_formats": ("pdf", "png", "ai"),
        "recommended_bleed_inches": 0.125,
        "safe_zone_inches": 0.25,
    }
)

PRODUCT_TYPES = tuple(PRINT_SPECS.keys())


# User value: normalizes the requested product so lookups never fail on casing or blanks.
def resolve_product_type(product_type: str | None) -> str:
    key = str(product_type or "").strip().lower()
    if key in PRINT_SPECS:
        return key
    return DEFAULT_PRODUCT_TYPE


# User value: always returns a usable specification, falling back to custom artwork rules.
def get_specification(product_type: str | None) -> PrintSpecification:
    return PRINT_SPECS[resolve_product_type(product_type)]
