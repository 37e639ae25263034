from functools import reduce
from typing import Any, Callable, Dict, Iterable, Tuple

from .domain import (
    AcademicFormat,
    AcademicResource,
    Course,
    CourseLevel,
    DigitalDownload,
    Product,
    ProductType,
)
from .ftypes import Either

# Wire keys of the variant-specific fields, per discriminator
VARIANT_KEYS: Dict[ProductType, Tuple[str, ...]] = {
    ProductType.COURSE: ("duration", "lectures", "level"),
    ProductType.DOWNLOAD: ("fileFormat", "fileSize", "version"),
    ProductType.ACADEMIC: ("grade", "subject", "format"),
}


def _error(message: str) -> Either[dict, Any]:
    return Either.left({"error": message})


# ============ Field checks ============


def _is_int(value: Any) -> bool:
    # bool is a subclass of int, but True is not a price
    return isinstance(value, int) and not isinstance(value, bool)


def _text(raw: dict, key: str) -> Either[dict, str]:
    value = raw.get(key)
    if not isinstance(value, str):
        return _error(f"Field '{key}' must be a string")
    return Either.right(value)


def _count(raw: dict, key: str) -> Either[dict, int]:
    value = raw.get(key)
    if not _is_int(value) or value < 0:
        return _error(f"Field '{key}' must be a non-negative integer")
    return Either.right(value)


def _choice(raw: dict, key: str, enum_cls) -> Either[dict, Any]:
    try:
        return Either.right(enum_cls(raw.get(key)))
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        return _error(f"Field '{key}' must be one of: {allowed}")


def _rating(raw: dict) -> Either[dict, float]:
    value = raw.get("rating")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _error("Field 'rating' must be a number")
    if not 0.0 <= value <= 5.0:
        return _error(f"Rating {value} is outside [0, 5]")
    return Either.right(float(value))


def _original_price(raw: dict) -> Either[dict, Any]:
    if raw.get("originalPrice") is None:
        return Either.right(None)
    return _count(raw, "originalPrice")


def _tags(raw: dict) -> Either[dict, Tuple[str, ...]]:
    value = raw.get("tags", ())
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        return _error("Field 'tags' must be a list of strings")
    return Either.right(tuple(value))


def _collect(raw: dict, checks: Dict[str, Callable[[dict], Either]]) -> Either[dict, dict]:
    """Runs every check in order, stops at the first Left, returns the collected fields"""

    def step(acc: Either[dict, dict], item) -> Either[dict, dict]:
        name, check = item
        return acc.bind(lambda fields: check(raw).map(lambda v: {**fields, name: v}))

    return reduce(step, checks.items(), Either.right({}))


# ============ Validation boundary ============

_SHARED_CHECKS: Dict[str, Callable[[dict], Either]] = {
    "id": lambda r: _text(r, "id"),
    "title": lambda r: _text(r, "title"),
    "description": lambda r: _text(r, "description"),
    "price": lambda r: _count(r, "price"),
    "original_price": _original_price,
    "thumbnail": lambda r: _text(r, "thumbnail"),
    "rating": _rating,
    "reviews_count": lambda r: _count(r, "reviewsCount"),
    "author": lambda r: _text(r, "author"),
    "tags": _tags,
}

_VARIANTS: Dict[ProductType, Tuple[type, Dict[str, Callable[[dict], Either]]]] = {
    ProductType.COURSE: (
        Course,
        {
            "duration": lambda r: _text(r, "duration"),
            "lectures": lambda r: _count(r, "lectures"),
            "level": lambda r: _choice(r, "level", CourseLevel),
        },
    ),
    ProductType.DOWNLOAD: (
        DigitalDownload,
        {
            "file_format": lambda r: _text(r, "fileFormat"),
            "file_size": lambda r: _text(r, "fileSize"),
            "version": lambda r: _text(r, "version"),
        },
    ),
    ProductType.ACADEMIC: (
        AcademicResource,
        {
            "grade": lambda r: _text(r, "grade"),
            "subject": lambda r: _text(r, "subject"),
            "format": lambda r: _choice(r, "format", AcademicFormat),
        },
    ),
}


def parse_product(raw: dict) -> Either[dict, Product]:
    """
    Validates raw catalog data (wire shape) and builds the matching variant.
    Left({"error": ...}) on unknown type, bad price/rating, missing or
    foreign variant fields.
    """
    if not isinstance(raw, dict):
        return _error("Product record must be an object")

    try:
        product_type = ProductType(raw.get("type"))
    except ValueError:
        return _error(f"Unknown product type: {raw.get('type')!r}")

    foreign = [
        key
        for other, keys in VARIANT_KEYS.items()
        if other is not product_type
        for key in keys
        if key not in VARIANT_KEYS[product_type] and key in raw
    ]
    if foreign:
        return _error(f"Fields {foreign} do not belong to a {product_type.value}")

    cls, variant_checks = _VARIANTS[product_type]
    return _collect(raw, {**_SHARED_CHECKS, **variant_checks}).map(
        lambda fields: cls(**fields)
    )


def parse_products(raws: Iterable[dict]) -> Either[dict, Tuple[Product, ...]]:
    """Validates a whole record set; the first invalid record fails all of it"""

    def step(acc: Either[dict, tuple], raw: dict) -> Either[dict, tuple]:
        return acc.bind(lambda done: parse_product(raw).map(lambda p: done + (p,)))

    return reduce(step, raws, Either.right(()))


# ============ Serialization ============


def variant_fields(product: Product) -> dict:
    """Variant-specific fields of a product in wire shape"""
    match product:
        case Course():
            return {
                "duration": product.duration,
                "lectures": product.lectures,
                "level": product.level.value,
            }
        case DigitalDownload():
            return {
                "fileFormat": product.file_format,
                "fileSize": product.file_size,
                "version": product.version,
            }
        case AcademicResource():
            return {
                "grade": product.grade,
                "subject": product.subject,
                "format": product.format.value,
            }
    raise TypeError(f"Not a product: {product!r}")


def product_to_dict(product: Product) -> dict:
    return {
        "id": product.id,
        "type": product.type.value,
        "title": product.title,
        "description": product.description,
        "price": product.price,
        "originalPrice": product.original_price,
        "thumbnail": product.thumbnail,
        "rating": product.rating,
        "reviewsCount": product.reviews_count,
        "author": product.author,
        "tags": list(product.tags),
        **variant_fields(product),
    }


# ============ Presentation helpers ============


def discount_percent(product: Product) -> int:
    """Whole-percent discount against the original price, 0 when there is none"""
    if product.original_price and product.original_price > product.price:
        return int((product.original_price - product.price) * 100 / product.original_price)
    return 0


def format_inr(amount: int) -> str:
    """Indian digit grouping: 123456 -> '₹1,23,456'"""
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) <= 3:
        return f"{sign}₹{digits}"

    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    return f"{sign}₹{','.join([head] + pairs)},{tail}"
