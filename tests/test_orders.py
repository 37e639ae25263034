from storefront.domain import Order, OrderStatus
from storefront.seed import seed_products
from storefront.service import StorefrontSession
from storefront.transforms import submit_order


def test_submit_creates_completed_order():
    session = StorefrontSession()
    session.add(seed_products()[0])
    session.add(seed_products()[2])

    result = submit_order(session.items, session.total(), ts="2025-11-25T12:00:00")

    assert result.is_right
    order = result.value
    assert isinstance(order, Order)
    assert order.id.startswith("ord_")
    assert order.total == 3998
    assert order.status is OrderStatus.COMPLETED
    assert order.date == "2025-11-25T12:00:00"


def test_submit_does_not_touch_cart():
    session = StorefrontSession()
    session.add(seed_products()[0])

    submit_order(session.items, session.total())

    assert len(session.items) == 1


def test_order_snapshot_is_frozen():
    course, _, download, academic = seed_products()
    session = StorefrontSession()
    session.add(course)
    line = session.add(download)

    order = submit_order(session.items, session.total()).value
    session.remove(line.cart_id)
    session.add(academic)
    session.clear()

    assert len(order.items) == 2
    assert order.items[1].product == download
    assert order.total == 3998


def test_list_snapshot_is_copied():
    session = StorefrontSession()
    session.add(seed_products()[0])
    items = list(session.items)

    order = submit_order(items, 3499).value
    items.clear()

    assert len(order.items) == 1


def test_order_ids_are_unique():
    session = StorefrontSession()
    session.add(seed_products()[3])

    ids = {submit_order(session.items, session.total()).value.id for _ in range(50)}

    assert len(ids) == 50


def test_empty_submission_rejected():
    result = submit_order((), 0)

    assert result.is_left
    assert "without items" in result.value["error"]


def test_negative_total_rejected():
    session = StorefrontSession()
    session.add(seed_products()[3])

    assert submit_order(session.items, -1).is_left


def test_place_order_clears_cart():
    session = StorefrontSession()
    session.add(seed_products()[1])

    result = session.place_order()

    assert result.is_right
    assert result.value.total == 1999
    assert session.items == ()
    assert session.total() == 0


def test_place_order_on_empty_cart_keeps_state():
    session = StorefrontSession()

    assert session.place_order().is_left
    assert session.items == ()
