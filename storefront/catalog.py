# storefront/catalog.py
# Catalog store with a fallback chain: primary store -> seed dataset.
# fetch_all() never raises; any Left from the primary stage folds into the seed dataset.

import asyncio
import logging
from typing import Callable, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from .db import ProductTable, create_database, create_schema, raw_to_row, row_to_raw
from .domain import Product
from .ftypes import Either
from .products import parse_products
from .seed import SEED_PRODUCTS, SEED_VERSION, seed_products

logger = logging.getLogger(__name__)


# ============ Primary stage ============


async def read_primary(session_factory: Callable) -> Either[str, Tuple[Product, ...]]:
    """Full-table read mapped through the validation boundary"""
    try:
        async with session_factory() as session:
            result = await session.execute(select(ProductTable).order_by(ProductTable.id))
            rows = tuple(result.scalars().all())
    except Exception as exc:
        return Either.left(f"primary store read failed: {exc}")

    if not rows:
        return Either.left("primary store returned no rows")

    try:
        raws = tuple(map(row_to_raw, rows))
    except (TypeError, ValueError, ArithmeticError) as exc:
        return Either.left(f"row mapping failed: {exc}")

    return parse_products(raws).fold(
        lambda err: Either.left(f"row validation failed: {err['error']}"),
        Either.right,
    )


# ============ Store ============


class CatalogStore:
    """Catalog access for the API and the UI; memory mode when no session factory is given"""

    def __init__(self, session_factory: Optional[Callable] = None, engine=None):
        self.session_factory = session_factory
        self.engine = engine
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_url(cls, url: Optional[str], echo: bool = False) -> "CatalogStore":
        if not url:
            return cls()
        session_factory, engine = create_database(url, echo=echo)
        return cls(session_factory, engine)

    @property
    def connected(self) -> bool:
        return self.session_factory is not None

    async def fetch_all(self) -> Tuple[Product, ...]:
        if not self.connected:
            return seed_products()

        result = await read_primary(self.session_factory)
        if result.is_left:
            logger.warning("Catalog falling back to seed data: %s", result.value)
        return result.get_or_else(seed_products())

    async def init_store(self) -> None:
        """
        Creates the products table when absent and seeds it when empty.
        Runs once per store; failures are logged, the store then serves seed data.
        """
        if not self.connected:
            logger.warning("DATABASE_URL not set, running in memory mode")
            return

        async with self._init_lock:
            if self._initialized:
                return
            try:
                if self.engine is not None:
                    await create_schema(self.engine)
                await self._seed_if_empty()
            except Exception:
                logger.exception("Catalog store initialization failed")
                return
            self._initialized = True

    async def _seed_if_empty(self) -> None:
        async with self.session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(ProductTable))
            if count:
                return

            logger.info("Seeding products table (seed %s, %d records)", SEED_VERSION, len(SEED_PRODUCTS))
            session.add_all([raw_to_row(raw) for raw in SEED_PRODUCTS])
            try:
                await session.commit()
            except IntegrityError:
                # another process seeded between the count and the insert
                await session.rollback()
                logger.info("Products table already seeded by another process")

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


# ============ Sync wrappers ============


def run_fetch_all(store: CatalogStore) -> Tuple[Product, ...]:
    """Sync wrapper for the UI"""

    async def _run() -> Tuple[Product, ...]:
        try:
            await store.init_store()
            return await store.fetch_all()
        finally:
            # pooled connections belong to this event loop
            await store.dispose()

    return asyncio.run(_run())
