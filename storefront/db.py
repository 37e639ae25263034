# storefront/db.py
# The single `products` table behind the catalog.

from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy import JSON, Integer, Numeric, String, Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .products import VARIANT_KEYS

# TEXT[] on Postgres, JSON list everywhere else
TagList = JSON().with_variant(postgresql.ARRAY(Text), "postgresql")


class Base(DeclarativeBase):
    pass


class ProductTable(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ext_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    original_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    thumbnail: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[Decimal]] = mapped_column(Numeric(3, 2), nullable=True)
    reviews_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    author: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tags: Mapped[Optional[list]] = mapped_column(TagList, nullable=True)

    # variant-specific fields, keyed the same way as the wire shape
    details: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)


# ============ Row mapping ============


def row_to_raw(row: ProductTable) -> dict:
    """Maps a table row back into the wire shape expected by parse_product"""
    return {
        "id": row.ext_id,
        "type": row.type,
        "title": row.title,
        "description": row.description,
        "price": row.price,
        "originalPrice": row.original_price,
        "thumbnail": row.thumbnail,
        "rating": float(row.rating) if row.rating is not None else None,
        "reviewsCount": row.reviews_count,
        "author": row.author,
        "tags": tuple(row.tags) if row.tags is not None else None,
        **(row.details or {}),
    }


def raw_to_row(raw: dict) -> ProductTable:
    """Builds an insertable row from a wire-shape record"""
    keys = [key for variant in VARIANT_KEYS.values() for key in variant]
    return ProductTable(
        ext_id=raw["id"],
        title=raw["title"],
        description=raw.get("description"),
        price=raw.get("price"),
        original_price=raw.get("originalPrice"),
        thumbnail=raw.get("thumbnail"),
        rating=Decimal(str(raw["rating"])) if raw.get("rating") is not None else None,
        reviews_count=raw.get("reviewsCount"),
        author=raw.get("author"),
        type=raw["type"],
        tags=list(raw.get("tags", [])),
        details={key: raw[key] for key in keys if key in raw},
    )


# ============ Database setup ============


def create_database(
    url: str, echo: bool = False
) -> Tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create engine for the primary store and return (session_factory, engine)."""
    engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
    return async_sessionmaker(engine, expire_on_commit=False), engine


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
