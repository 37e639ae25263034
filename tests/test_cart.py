import itertools
from functools import partial

import pytest

from storefront.domain import Cart
from storefront.seed import seed_products
from storefront.service import StorefrontSession
from storefront.transforms import (
    add_to_cart,
    cart_total,
    clear_cart,
    remove_from_cart,
    replay_cart,
)


@pytest.fixture
def products():
    course, course2, download, academic = seed_products()
    return {"course": course, "course2": course2, "download": download, "academic": academic}


def test_add_returns_line_and_new_cart(products):
    cart = Cart(id="c1")
    updated, item = add_to_cart(cart, products["course"])

    assert cart.items == ()
    assert updated.items == (item,)
    assert item.product == products["course"]
    assert item.cart_id


def test_same_product_twice_gives_two_lines(products):
    session = StorefrontSession()
    first = session.add(products["course"])
    second = session.add(products["course"])

    assert len(session.items) == 2
    assert first.cart_id != second.cart_id
    assert first.cart_id != products["course"].id

    session.remove(first.cart_id)

    assert session.items == (second,)
    assert session.items[0].product == products["course"]


def test_remove_is_idempotent(products):
    session = StorefrontSession()
    session.remove("missing")
    assert session.items == ()

    item = session.add(products["download"])
    session.remove("missing")
    assert session.items == (item,)

    session.remove(item.cart_id)
    session.remove(item.cart_id)
    assert session.items == ()


def test_total_follows_live_items(products):
    session = StorefrontSession()
    course_line = session.add(products["course"])
    session.add(products["download"])

    assert session.total() == 3998

    session.remove(course_line.cart_id)
    assert session.total() == 499


def test_total_is_sum_of_present_prices(products):
    cart = Cart(id="c1")
    lines = []
    for product in (products["course"], products["academic"], products["course2"], products["academic"]):
        cart, item = add_to_cart(cart, product)
        lines.append(item)
    cart = remove_from_cart(cart, lines[1].cart_id)

    assert cart_total(cart) == sum(item.price for item in cart.items) == 3499 + 1999 + 199


def test_clear_empties_cart(products):
    cart, _ = add_to_cart(Cart(id="c1"), products["course"])
    cleared = clear_cart(cart)

    assert cleared.items == ()
    assert cleared.id == "c1"
    assert cart_total(cleared) == 0


def test_replay_gives_same_cart(products):
    """Same history from empty -> same items and total"""
    history = (
        lambda c: add_to_cart(c, products["course"], "l1")[0],
        lambda c: add_to_cart(c, products["download"], "l2")[0],
        lambda c: add_to_cart(c, products["course"], "l3")[0],
        partial(remove_from_cart, cart_id="l1"),
    )

    first = replay_cart(Cart(id="c1"), history)
    second = replay_cart(Cart(id="c1"), history)

    assert first == second
    assert [i.cart_id for i in first.items] == ["l2", "l3"]
    assert cart_total(first) == 3998


def test_session_uses_id_factory(products):
    counter = itertools.count(1)
    session = StorefrontSession(id_factory=lambda: f"line-{next(counter)}")

    session.add(products["course"])
    session.add(products["academic"])

    assert [i.cart_id for i in session.items] == ["line-1", "line-2"]


def test_taken_cart_id_is_not_reused(products):
    """Two adds with the same requested id stay independently removable"""
    cart, first = add_to_cart(Cart(id="c1"), products["course"], "x")
    cart, second = add_to_cart(cart, products["download"], "x")

    assert first.cart_id == "x"
    assert second.cart_id != "x"

    cart = remove_from_cart(cart, "x")

    assert cart.items == (second,)
    assert cart_total(cart) == 499


def test_session_with_repeating_id_factory(products):
    session = StorefrontSession(id_factory=lambda: "same")
    session.add(products["course"])
    session.add(products["course"])

    assert len({i.cart_id for i in session.items}) == 2

    session.remove("same")

    assert len(session.items) == 1
    assert session.items[0].product == products["course"]
