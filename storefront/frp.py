from dataclasses import dataclass
from datetime import datetime
from functools import reduce
from typing import Callable, Tuple
import uuid

from .domain import Event, Product
from .ftypes import Maybe

ITEM_ADDED = "ITEM_ADDED"
DISMISS = "DISMISS"
PROCEED_TO_CHECKOUT = "PROCEED_TO_CHECKOUT"

CHECKOUT_ROUTE = "/cart"


@dataclass(frozen=True)
class EventBus:
    """
    Immutable event bus.
    Subscribers are pure functions: (Event, State) -> State
    """

    subscribers: Tuple[Tuple[str, Callable], ...] = ()

    def subscribe(
        self, event_name: str, handler: Callable[[Event, dict], dict]
    ) -> "EventBus":
        """Returns a new bus with the handler added"""
        return EventBus(subscribers=self.subscribers + ((event_name, handler),))

    def publish(self, event: Event, state: dict) -> dict:
        """Applies every matching handler in subscription order, returns the new state"""
        matching_handlers = tuple(
            handler for name, handler in self.subscribers if name == event.name
        )
        return reduce(lambda current, handler: handler(event, current), matching_handlers, state)


def create_event(name: str, payload: dict) -> Event:
    return Event(
        id=str(uuid.uuid4()),
        ts=datetime.now().isoformat(),
        name=name,
        payload=payload,
    )


# ============ Notification handlers ============


def handle_item_added(event: Event, state: dict) -> dict:
    """
    ITEM_ADDED: the slot takes the new product.
    Last write wins, an older notification is replaced, not queued.
    """
    return {
        **state,
        "notification": Maybe.some(event.payload["product"]),
        "navigate_to": None,
        "last_event": event.name,
    }


def handle_dismiss(event: Event, state: dict) -> dict:
    return {
        **state,
        "notification": Maybe.nothing(),
        "last_event": event.name,
    }


def handle_proceed_to_checkout(event: Event, state: dict) -> dict:
    """
    PROCEED_TO_CHECKOUT: hides the notification and leaves a navigation
    intent for the view layer. Cart contents are not touched.
    """
    return {
        **state,
        "notification": Maybe.nothing(),
        "navigate_to": CHECKOUT_ROUTE,
        "last_event": event.name,
    }


def create_notification_bus() -> EventBus:
    bus = EventBus()
    bus = bus.subscribe(ITEM_ADDED, handle_item_added)
    bus = bus.subscribe(DISMISS, handle_dismiss)
    bus = bus.subscribe(PROCEED_TO_CHECKOUT, handle_proceed_to_checkout)
    return bus


def initial_state() -> dict:
    return {
        "notification": Maybe.nothing(),
        "navigate_to": None,
        "last_event": None,
    }


def notified_product(state: dict) -> Maybe[Product]:
    return state.get("notification", Maybe.nothing())


def apply_events(bus: EventBus, events: Tuple[Event, ...], state: dict) -> dict:
    """(events, initial_state) -> final_state"""
    return reduce(lambda s, e: bus.publish(e, s), events, state)
