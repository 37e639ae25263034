from functools import lru_cache
from typing import Tuple

from .domain import Product
from .products import parse_products

# Bump when the records below change; logged when a store gets seeded
SEED_VERSION = "2024.1"

SEED_PRODUCTS: Tuple[dict, ...] = (
    {
        "id": "c1",
        "type": "course",
        "title": "Full Stack Web Development",
        "description": "Master the MERN stack and build real-world applications.",
        "price": 3499,
        "originalPrice": 12999,
        "thumbnail": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=800&q=80",
        "rating": 4.8,
        "reviewsCount": 1240,
        "author": "CodeWithRahul",
        "tags": ["Web Dev", "React", "NodeJS"],
        "duration": "42h 30m",
        "lectures": 320,
        "level": "Intermediate",
    },
    {
        "id": "c2",
        "type": "course",
        "title": "Digital Marketing Mastery",
        "description": "Learn SEO, Social Media, and Google Ads.",
        "price": 1999,
        "originalPrice": 4999,
        "thumbnail": "https://images.unsplash.com/photo-1533750516457-a7f992034fec?w=800&q=80",
        "rating": 4.6,
        "reviewsCount": 850,
        "author": "Priya Digital",
        "tags": ["Marketing", "SEO"],
        "duration": "18h",
        "lectures": 145,
        "level": "Beginner",
    },
    {
        "id": "d1",
        "type": "download",
        "title": "GST Invoice Template",
        "description": "Professional, GST-compliant invoice templates.",
        "price": 499,
        "originalPrice": 999,
        "thumbnail": "https://images.unsplash.com/photo-1554224155-8d04cb21cd6c?w=800&q=80",
        "rating": 4.7,
        "reviewsCount": 320,
        "author": "BizTools",
        "tags": ["Business", "Templates"],
        "fileFormat": "XLSX",
        "fileSize": "2.4 MB",
        "version": "3.1",
    },
    {
        "id": "a1",
        "type": "academic",
        "title": "Class 12 Physics Notes",
        "description": "Last 10 years solved papers and important questions.",
        "price": 199,
        "originalPrice": 499,
        "thumbnail": "https://images.unsplash.com/photo-1635070041078-e363dbe005cb?w=800&q=80",
        "rating": 4.8,
        "reviewsCount": 450,
        "author": "TopperNotes",
        "tags": ["CBSE", "Physics"],
        "grade": "Class 12",
        "subject": "Physics",
        "format": "PDF",
    },
)


@lru_cache
def seed_products() -> Tuple[Product, ...]:
    """Seed records passed through the validation boundary (cached, immutable)"""
    result = parse_products(SEED_PRODUCTS)
    if result.is_left:
        raise ValueError(f"Seed dataset is invalid: {result.value['error']}")
    return result.value
