import uuid
from datetime import datetime, timezone
from functools import reduce
from typing import Callable, Iterable, Optional, Tuple

from .domain import Cart, CartItem, Order, OrderStatus, Product, ProductType
from .ftypes import Either, Maybe


def new_cart_id() -> str:
    return uuid.uuid4().hex


def new_order_id() -> str:
    return f"ord_{uuid.uuid4().hex[:9]}"


# ============ Cart operations (pure) ============


def add_to_cart(
    cart: Cart, product: Product, cart_id: Optional[str] = None
) -> Tuple[Cart, CartItem]:
    """
    Returns the new Cart and the appended line; every add gets its own cart id.
    A cart id already present in the cart is replaced by a fresh one.
    """
    taken = {line.cart_id for line in cart.items}
    line_id = cart_id or new_cart_id()
    while line_id in taken:
        line_id = new_cart_id()

    item = CartItem(product=product, cart_id=line_id)
    return Cart(id=cart.id, items=cart.items + (item,)), item


def remove_from_cart(cart: Cart, cart_id: str) -> Cart:
    """Drops the line with cart_id; an unknown id leaves the cart as it was"""
    filtered_items = tuple(filter(lambda item: item.cart_id != cart_id, cart.items))
    return Cart(id=cart.id, items=filtered_items)


def clear_cart(cart: Cart) -> Cart:
    return Cart(id=cart.id, items=())


def cart_total(cart: Cart) -> int:
    """Sum of the prices of the lines currently in the cart"""
    return reduce(lambda acc, item: acc + item.price, cart.items, 0)


def replay_cart(cart: Cart, operations: Iterable[Callable[[Cart], Cart]]) -> Cart:
    """Folds a history of cart operations over a starting cart"""
    return reduce(lambda acc, op: op(acc), operations, cart)


# ============ Order submission ============


def submit_order(
    items: Iterable[CartItem], total: int, ts: Optional[str] = None
) -> Either[dict, Order]:
    """
    Snapshot of cart lines + total -> Either[error, Order]
    Left on an empty snapshot or a negative total.
    The caller decides whether to clear its cart.
    """
    snapshot = tuple(items)

    if not snapshot:
        return Either.left({"error": "Cannot place an order without items"})
    if total < 0:
        return Either.left({"error": f"Order total must not be negative, got {total}"})

    order = Order(
        id=new_order_id(),
        date=ts or datetime.now(timezone.utc).isoformat(),
        items=snapshot,
        total=total,
        status=OrderStatus.COMPLETED,
    )
    return Either.right(order)


# ============ Filters (closures) ============


def by_type(product_type: ProductType) -> Callable[[Product], bool]:
    return lambda p: p.type is product_type


def by_tag(tag: str) -> Callable[[Product], bool]:
    return lambda p: tag in p.tags


def safe_product(products: Tuple[Product, ...], pid: str) -> Maybe[Product]:
    """Product lookup by catalog id"""
    found = next((p for p in products if p.id == pid), None)
    return Maybe.from_optional(found)
