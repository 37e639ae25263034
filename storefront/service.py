from typing import Callable, Optional, Tuple

from storefront.domain import Cart, CartItem, Order, Product, ProductType
from storefront.frp import (
    DISMISS,
    ITEM_ADDED,
    PROCEED_TO_CHECKOUT,
    EventBus,
    create_event,
    create_notification_bus,
    initial_state,
    notified_product,
)
from storefront.ftypes import Either, Maybe
from storefront.transforms import (
    add_to_cart,
    by_type,
    cart_total,
    clear_cart,
    new_cart_id,
    remove_from_cart,
    safe_product,
    submit_order,
)


class CatalogService:
    """Facade over a fetched catalog"""

    def __init__(self, products: Tuple[Product, ...]):
        self.products = products

    def by_type(self, product_type: ProductType) -> Tuple[Product, ...]:
        return tuple(filter(by_type(product_type), self.products))

    def filter_products(self, predicate) -> Tuple[Product, ...]:
        return tuple(filter(predicate, self.products))

    def find(self, product_id: str) -> Maybe[Product]:
        return safe_product(self.products, product_id)


class StorefrontSession:
    """
    Per-session state: the cart and the notification slot.
    Created once per user session and passed to whoever needs it; every
    operation runs to completion before the next one starts.
    """

    def __init__(
        self,
        cart_id: str = "cart_default",
        bus: Optional[EventBus] = None,
        id_factory: Callable[[], str] = new_cart_id,
    ):
        self.cart = Cart(id=cart_id)
        self.bus = bus or create_notification_bus()
        self.ui_state = initial_state()
        self._id_factory = id_factory

    # ---- cart ----

    def add(self, product: Product) -> CartItem:
        self.cart, item = add_to_cart(self.cart, product, self._id_factory())
        self._publish(ITEM_ADDED, {"product": product, "cart_id": item.cart_id})
        return item

    def remove(self, cart_id: str) -> None:
        self.cart = remove_from_cart(self.cart, cart_id)

    def clear(self) -> None:
        self.cart = clear_cart(self.cart)

    def total(self) -> int:
        return cart_total(self.cart)

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self.cart.items

    # ---- notification ----

    @property
    def notification(self) -> Maybe[Product]:
        return notified_product(self.ui_state)

    def dismiss_notification(self) -> None:
        self._publish(DISMISS, {})

    def proceed_to_checkout(self) -> Optional[str]:
        """Hides the notification and returns the route the view should open"""
        self._publish(PROCEED_TO_CHECKOUT, {})
        return self.ui_state["navigate_to"]

    def consume_navigation(self) -> Optional[str]:
        route = self.ui_state.get("navigate_to")
        self.ui_state = {**self.ui_state, "navigate_to": None}
        return route

    # ---- checkout ----

    def place_order(self) -> Either[dict, Order]:
        """Submits a snapshot of the cart and clears the cart when the order is created"""
        result = submit_order(self.cart.items, self.total())
        if result.is_right:
            self.clear()
        return result

    def _publish(self, name: str, payload: dict) -> None:
        self.ui_state = self.bus.publish(create_event(name, payload), self.ui_state)
