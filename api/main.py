import logging
from contextlib import asynccontextmanager
from functools import reduce
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from api.schemas import HealthOut, LoginIn, OrderIn, OrderOut, UserOut
from storefront.catalog import CatalogStore
from storefront.config import Settings, configure_logging, load_settings
from storefront.domain import CartItem, ProductType, User, UserRole
from storefront.ftypes import Either
from storefront.products import parse_product, product_to_dict
from storefront.transforms import by_type, submit_order

logger = logging.getLogger(__name__)

DEMO_USER = User(
    id="u1",
    name="Aditi Sharma",
    email="aditi@example.com",
    role=UserRole.STUDENT,
    avatar="https://images.unsplash.com/photo-1494790108377-be9c29b29330?auto=format&fit=crop&w=200&q=80",
    wallet_balance=0,
)


# ----------------------
# Helpers
# ----------------------
def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def parse_cart_line(line: dict) -> Either[dict, CartItem]:
    raw = {k: v for k, v in line.items() if k != "cartId"}
    return parse_product(raw).map(lambda p: CartItem(product=p, cart_id=line["cartId"]))


def parse_cart_lines(lines: List[dict]) -> Either[dict, tuple]:
    def step(acc: Either[dict, tuple], line: dict) -> Either[dict, tuple]:
        return acc.bind(lambda done: parse_cart_line(line).map(lambda i: done + (i,)))

    return reduce(step, lines, Either.right(()))


# ----------------------
# App
# ----------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        store = CatalogStore.from_url(settings.database_url, echo=settings.database_echo)
        await store.init_store()
        app.state.catalog = store
        logger.info("Catalog ready in %s mode", settings.mode)
        yield
        await store.dispose()

    app = FastAPI(title="Digital Goods Storefront API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health", response_model=HealthOut)
    def health():
        return HealthOut(mode=settings.mode)

    # Products
    @app.get("/api/products")
    async def list_products(
        type: Optional[ProductType] = None,
        catalog: CatalogStore = Depends(get_catalog),
    ):
        products = await catalog.fetch_all()
        if type is not None:
            products = tuple(filter(by_type(type), products))
        return [product_to_dict(p) for p in products]

    # Auth (simulated)
    @app.post("/api/auth/login", response_model=UserOut)
    def login(payload: Optional[LoginIn] = None):
        role = payload.role if payload and payload.role else DEMO_USER.role
        return UserOut(
            id=DEMO_USER.id,
            name=DEMO_USER.name,
            email=DEMO_USER.email,
            role=role,
            avatar=DEMO_USER.avatar,
            walletBalance=DEMO_USER.wallet_balance,
        )

    # Orders (simulated)
    @app.post("/api/orders", response_model=OrderOut)
    def create_order(payload: OrderIn):
        lines = parse_cart_lines([item.model_dump() for item in payload.items])
        if lines.is_left:
            raise HTTPException(status_code=422, detail=lines.value["error"])

        result = submit_order(lines.value, payload.total)
        if result.is_left:
            raise HTTPException(status_code=422, detail=result.value["error"])

        order = result.value
        logger.info("Order %s placed: %d items, total %d", order.id, len(order.items), order.total)
        return OrderOut(orderId=order.id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
