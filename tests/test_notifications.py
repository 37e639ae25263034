from storefront.frp import (
    DISMISS,
    ITEM_ADDED,
    PROCEED_TO_CHECKOUT,
    EventBus,
    apply_events,
    create_event,
    create_notification_bus,
    initial_state,
    notified_product,
)
from storefront.seed import seed_products
from storefront.service import StorefrontSession


def test_eventbus_immutability():
    bus1 = EventBus()
    bus2 = bus1.subscribe("TEST", lambda e, s: s)

    assert bus1.subscribers == ()
    assert len(bus2.subscribers) == 1


def test_item_added_shows_notification():
    course = seed_products()[0]
    bus = create_notification_bus()

    state = bus.publish(create_event(ITEM_ADDED, {"product": course}), initial_state())

    assert notified_product(state).get_or_else(None) == course
    assert state["last_event"] == ITEM_ADDED


def test_second_add_overwrites_first():
    """A then B without dismiss -> only B is shown"""
    course, _, download, _ = seed_products()
    session = StorefrontSession()

    session.add(course)
    session.add(download)

    assert session.notification.get_or_else(None) == download
    assert session.ui_state["notification"].value is download


def test_dismiss_hides_notification():
    session = StorefrontSession()
    session.add(seed_products()[0])

    session.dismiss_notification()

    assert session.notification.is_none()
    assert len(session.items) == 1


def test_dismiss_when_hidden_is_harmless():
    session = StorefrontSession()
    session.dismiss_notification()

    assert session.notification.is_none()


def test_proceed_to_checkout_keeps_cart():
    session = StorefrontSession()
    session.add(seed_products()[2])

    route = session.proceed_to_checkout()

    assert route == "/cart"
    assert session.notification.is_none()
    assert len(session.items) == 1
    assert session.consume_navigation() == "/cart"
    assert session.consume_navigation() is None


def test_add_after_dismiss_shows_again():
    course, course2, _, _ = seed_products()
    bus = create_notification_bus()
    events = (
        create_event(ITEM_ADDED, {"product": course}),
        create_event(DISMISS, {}),
        create_event(ITEM_ADDED, {"product": course2}),
    )

    state = apply_events(bus, events, initial_state())

    assert notified_product(state).get_or_else(None) == course2


def test_checkout_then_add_clears_navigation():
    course = seed_products()[0]
    bus = create_notification_bus()
    events = (
        create_event(PROCEED_TO_CHECKOUT, {}),
        create_event(ITEM_ADDED, {"product": course}),
    )

    state = apply_events(bus, events, initial_state())

    assert state["navigate_to"] is None
    assert notified_product(state).is_some()
