"""
Tests for the in-memory Cart.
"""

import random
import uuid
from decimal import Decimal

from pos_app.models.cart import Cart, CartSessions
from pos_app.models.product import Product


def make_product(name: str, price: str) -> Product:
    return Product(id=uuid.uuid4(), name=name, price=Decimal(price))


def test_add_same_product_twice_yields_one_line_with_quantity_two():
    cart = Cart()
    p = make_product("Teh Manis", "3000")

    cart.add(p)
    cart.add(p)

    assert len(cart) == 1
    assert cart.lines[0].product_id == p.id
    assert cart.lines[0].quantity == 2


def test_add_keeps_first_insertion_order():
    cart = Cart()
    a, b = make_product("A", "1"), make_product("B", "2")

    cart.add(a)
    cart.add(b)
    cart.add(a)

    assert [ln.product_id for ln in cart.lines] == [a.id, b.id]


def test_price_is_captured_when_line_is_created():
    cart = Cart()
    p = make_product("Kopi", "1000")
    cart.add(p)

    # A later catalog edit hands us a new Product with a new price
    repriced = p.model_copy(update={"price": Decimal("1500")})
    cart.add(repriced)

    line = cart.get(p.id)
    assert line.unit_price == Decimal("1000")
    assert line.quantity == 2
    assert cart.total() == Decimal("2000")


def test_remove_deletes_line_and_is_noop_when_absent():
    cart = Cart()
    p = make_product("A", "10")
    cart.add(p)

    cart.remove(uuid.uuid4())
    assert len(cart) == 1

    cart.remove(p.id)
    assert cart.is_empty


def test_increment_and_decrement_ignore_unknown_products():
    cart = Cart()
    p = make_product("A", "10")
    cart.add(p)

    cart.increment_quantity(uuid.uuid4())
    cart.decrement_quantity(uuid.uuid4())

    assert cart.get(p.id).quantity == 1


def test_decrement_clamps_at_one_and_never_removes():
    cart = Cart()
    p = make_product("A", "10")
    cart.add(p)
    cart.increment_quantity(p.id)
    assert cart.get(p.id).quantity == 2

    for _ in range(5):
        cart.decrement_quantity(p.id)

    assert len(cart) == 1
    assert cart.get(p.id).quantity == 1


def test_total_of_empty_cart_is_zero():
    assert Cart().total() == Decimal("0")


def test_total_is_exact_for_decimal_prices():
    cart = Cart()
    p = make_product("Permen", "0.10")
    for _ in range(3):
        cart.add(p)
    q = make_product("Gula", "0.20")
    cart.add(q)

    # 0.1 * 3 + 0.2 is 0.5 exactly, not 0.5000000000000001
    assert cart.total() == Decimal("0.50")


def test_total_matches_line_sum_after_random_mutations():
    rng = random.Random(1234)
    products = [make_product(f"P{i}", f"{rng.randint(0, 5000)}.{rng.randint(0, 99):02d}") for i in range(5)]
    cart = Cart()

    for _ in range(300):
        p = rng.choice(products)
        op = rng.choice(["add", "remove", "inc", "dec"])
        if op == "add":
            cart.add(p)
        elif op == "remove":
            cart.remove(p.id)
        elif op == "inc":
            cart.increment_quantity(p.id)
        else:
            cart.decrement_quantity(p.id)

        ids = [ln.product_id for ln in cart.lines]
        assert len(ids) == len(set(ids))
        assert all(ln.quantity >= 1 for ln in cart.lines)
        expected = sum((ln.unit_price * ln.quantity for ln in cart.lines), Decimal("0"))
        assert cart.total() == expected


def test_total_quantity_and_clear():
    cart = Cart()
    a, b = make_product("A", "1"), make_product("B", "2")
    cart.add(a)
    cart.add(a)
    cart.add(b)
    assert cart.total_quantity() == 3

    cart.clear()
    assert cart.is_empty
    assert cart.total() == Decimal("0")


def test_cart_sessions_give_each_session_its_own_cart():
    sessions = CartSessions()
    alice, bob = uuid.uuid4(), uuid.uuid4()

    sessions.for_session(alice).add(make_product("A", "1"))

    assert sessions.for_session(alice) is sessions.for_session(alice)
    assert sessions.for_session(bob).is_empty

    sessions.discard(alice)
    assert sessions.for_session(alice).is_empty
