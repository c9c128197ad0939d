"""Integration tests for guest and user carts."""

import uuid

from conftest import API, add_to_cart, auth_headers
from storefront.models.cart import MAX_QUANTITY


def _guest(session_id):
    return {"x-session-id": session_id}


def _items(response):
    return response.json()["data"]["items"]


class TestGetCart:
    def test_guest_without_header_gets_new_session(self, client):
        response = client.get(f"{API}/cart")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["sessionId"]
        assert len(body["sessionId"]) >= 32
        assert body["data"]["items"] == []
        assert body["data"]["sessionId"] == body["sessionId"]
        assert body["data"]["userId"] is None

    def test_each_new_guest_gets_a_distinct_token(self, client):
        first = client.get(f"{API}/cart").json()["sessionId"]
        second = client.get(f"{API}/cart").json()["sessionId"]
        assert first != second

    def test_guest_header_reuses_cart(self, client):
        first = client.get(f"{API}/cart").json()
        token = first["sessionId"]

        second = client.get(f"{API}/cart", headers=_guest(token)).json()
        assert second["sessionId"] == token
        assert second["data"]["id"] == first["data"]["id"]

    def test_user_cart_ignores_guest_header(self, client, user_id, user_headers):
        guest_cart = client.get(f"{API}/cart", headers=_guest("guest-abc")).json()

        response = client.get(
            f"{API}/cart", headers={**user_headers, **_guest("guest-abc")}
        )
        body = response.json()
        assert body["sessionId"] is None
        assert body["data"]["userId"] == str(user_id)
        assert body["data"]["id"] != guest_cart["data"]["id"]

    def test_overlong_session_header_is_400(self, client):
        response = client.get(f"{API}/cart", headers=_guest("x" * 200))
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid session ID"}

    def test_session_header_at_column_limit_is_accepted(self, client):
        token = "x" * 128
        response = client.get(f"{API}/cart", headers=_guest(token))
        assert response.status_code == 200
        assert response.json()["sessionId"] == token

    def test_invalid_token_is_401(self, client):
        response = client.get(
            f"{API}/cart", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.json()["success"] is False


class TestAddToCart:
    def test_repeated_add_sums_quantity(self, client, make_product):
        product = make_product(price=20.0, stock=5, sizes=["S", "M"])
        headers = _guest("guest-1")

        first = add_to_cart(client, product.id, "S", 3, headers)
        assert first.status_code == 200
        assert first.json()["message"] == "Item added to cart"
        assert len(_items(first)) == 1
        assert _items(first)[0]["quantity"] == 3

        second = add_to_cart(client, product.id, "S", 2, headers)
        items = _items(second)
        assert len(items) == 1
        assert items[0]["quantity"] == 5
        assert items[0]["product"]["id"] == str(product.id)

    def test_quantity_defaults_to_one(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "M", headers=_guest("guest-2"))
        assert _items(response)[0]["quantity"] == 1

    def test_different_sizes_are_separate_lines_in_order(self, client, make_product):
        product = make_product()
        headers = _guest("guest-3")

        add_to_cart(client, product.id, "L", 1, headers)
        response = add_to_cart(client, product.id, "S", 1, headers)
        assert [it["size"] for it in _items(response)] == ["L", "S"]

    def test_no_stock_check_on_add(self, client, make_product):
        product = make_product(stock=1)
        response = add_to_cart(client, product.id, "S", 50, _guest("guest-4"))
        assert response.status_code == 200
        assert _items(response)[0]["quantity"] == 50

    def test_totals(self, client, make_product):
        tee = make_product(price=20.0)
        hoodie = make_product(price=15.5)
        headers = _guest("guest-5")

        add_to_cart(client, tee.id, "S", 2, headers)
        response = add_to_cart(client, hoodie.id, "M", 1, headers)
        cart = response.json()["data"]
        assert cart["totalQuantity"] == 3
        assert cart["totalPrice"] == 55.5
        assert [it["lineTotal"] for it in cart["items"]] == [40.0, 15.5]

    def test_guest_without_header_receives_token(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "S", 1)
        token = response.json()["sessionId"]
        assert token

        cart = client.get(f"{API}/cart", headers=_guest(token)).json()["data"]
        assert len(cart["items"]) == 1

    def test_unknown_product_is_404(self, client):
        response = add_to_cart(client, uuid.uuid4(), "S", 1, _guest("guest-6"))
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_unavailable_size_is_400(self, client, make_product):
        product = make_product(sizes=["S", "M"])
        response = add_to_cart(client, product.id, "XL", 1, _guest("guest-7"))
        assert response.status_code == 400
        assert "size" in response.json()["message"].lower()

    def test_unknown_size_code_is_400(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "XXL", 1, _guest("guest-8"))
        assert response.status_code == 400

    def test_zero_quantity_is_400(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "S", 0, _guest("guest-9"))
        assert response.status_code == 400

    def test_missing_fields_are_400(self, client):
        response = client.post(f"{API}/cart/add", json={}, headers=_guest("guest-10"))
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_validation_error_lists_offending_fields(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "S", 0, _guest("guest-11"))
        assert response.status_code == 400
        assert response.json()["errors"] == ["body.quantity"]

    def test_huge_quantity_is_400(self, client, make_product):
        product = make_product()
        response = add_to_cart(client, product.id, "S", 2**63, _guest("guest-12"))
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_summed_quantity_past_limit_is_400(self, client, make_product):
        product = make_product()
        headers = _guest("guest-13")
        add_to_cart(client, product.id, "S", MAX_QUANTITY, headers)

        response = add_to_cart(client, product.id, "S", 1, headers)
        assert response.status_code == 400
        assert response.json()["message"] == f"Quantity cannot exceed {MAX_QUANTITY}"

        cart = client.get(f"{API}/cart", headers=headers).json()["data"]
        assert cart["items"][0]["quantity"] == MAX_QUANTITY


class TestUpdateCartItem:
    def _cart_with_item(self, client, make_product, token, quantity=2):
        product = make_product()
        response = add_to_cart(client, product.id, "S", quantity, _guest(token))
        return _items(response)[0]["id"]

    def test_sets_absolute_quantity(self, client, make_product):
        item_id = self._cart_with_item(client, make_product, "guest-u1")

        response = client.put(
            f"{API}/cart/item/{item_id}",
            json={"quantity": 7},
            headers=_guest("guest-u1"),
        )
        assert response.status_code == 200
        assert _items(response)[0]["quantity"] == 7

    def test_huge_quantity_is_400(self, client, make_product):
        item_id = self._cart_with_item(client, make_product, "guest-u4")

        response = client.put(
            f"{API}/cart/item/{item_id}",
            json={"quantity": 2**63},
            headers=_guest("guest-u4"),
        )
        assert response.status_code == 400

    def test_zero_quantity_is_rejected_and_item_unchanged(self, client, make_product):
        item_id = self._cart_with_item(client, make_product, "guest-u2", quantity=4)

        response = client.put(
            f"{API}/cart/item/{item_id}",
            json={"quantity": 0},
            headers=_guest("guest-u2"),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be at least 1"

        cart = client.get(f"{API}/cart", headers=_guest("guest-u2")).json()["data"]
        assert cart["items"][0]["quantity"] == 4

    def test_unknown_item_is_404(self, client, make_product):
        self._cart_with_item(client, make_product, "guest-u3")

        response = client.put(
            f"{API}/cart/item/{uuid.uuid4()}",
            json={"quantity": 1},
            headers=_guest("guest-u3"),
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Cart item not found"

    def test_missing_cart_is_404(self, client):
        response = client.put(
            f"{API}/cart/item/{uuid.uuid4()}",
            json={"quantity": 1},
            headers=_guest("never-used"),
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found"

    def test_cannot_touch_another_carts_item(self, client, make_product):
        item_id = self._cart_with_item(client, make_product, "guest-owner")
        client.get(f"{API}/cart", headers=_guest("guest-other"))

        response = client.put(
            f"{API}/cart/item/{item_id}",
            json={"quantity": 9},
            headers=_guest("guest-other"),
        )
        assert response.status_code == 404


class TestRemoveAndClear:
    def test_remove_item(self, client, make_product):
        a = make_product()
        b = make_product()
        headers = _guest("guest-r1")
        add_to_cart(client, a.id, "S", 1, headers)
        items = _items(add_to_cart(client, b.id, "S", 1, headers))

        response = client.delete(f"{API}/cart/item/{items[0]['id']}", headers=headers)
        assert response.status_code == 200
        remaining = _items(response)
        assert len(remaining) == 1
        assert remaining[0]["productId"] == str(b.id)

    def test_remove_unknown_item_is_404(self, client):
        headers = _guest("guest-r2")
        client.get(f"{API}/cart", headers=headers)

        response = client.delete(f"{API}/cart/item/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 404

    def test_clear_keeps_cart(self, client, make_product):
        product = make_product()
        headers = _guest("guest-c1")
        cart_id = add_to_cart(client, product.id, "S", 2, headers).json()["data"]["id"]

        response = client.delete(f"{API}/cart/clear", headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cart cleared"
        assert body["data"]["items"] == []
        assert body["data"]["id"] == cart_id

        again = client.get(f"{API}/cart", headers=headers).json()["data"]
        assert again["id"] == cart_id
        assert again["items"] == []


class TestMergeCarts:
    def test_merge_sums_overlaps_and_deletes_guest_cart(
        self, client, make_product, user_id, user_headers
    ):
        a = make_product(name="A")
        b = make_product(name="B")
        c = make_product(name="C")

        add_to_cart(client, a.id, "S", 1, user_headers)
        add_to_cart(client, b.id, "M", 1, user_headers)

        guest = _guest("guest-m1")
        guest_cart_id = add_to_cart(client, a.id, "S", 2, guest).json()["data"]["id"]
        add_to_cart(client, c.id, "L", 1, guest)

        response = client.post(
            f"{API}/cart/merge", headers={**user_headers, **guest}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Carts merged successfully"

        items = body["data"]["items"]
        # 2 user lines + 2 guest lines - 1 overlapping (product, size)
        assert len(items) == 3
        by_key = {(it["productId"], it["size"]): it["quantity"] for it in items}
        assert by_key == {
            (str(a.id), "S"): 3,
            (str(b.id), "M"): 1,
            (str(c.id), "L"): 1,
        }
        assert body["data"]["userId"] == str(user_id)

        # The guest token now maps to a brand new, empty cart
        fresh = client.get(f"{API}/cart", headers=guest).json()["data"]
        assert fresh["id"] != guest_cart_id
        assert fresh["items"] == []

    def test_merge_into_missing_user_cart_creates_it(
        self, client, make_product, user_headers
    ):
        product = make_product()
        guest = _guest("guest-m2")
        add_to_cart(client, product.id, "S", 2, guest)

        response = client.post(f"{API}/cart/merge", headers={**user_headers, **guest})
        items = response.json()["data"]["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 2

    def test_merge_without_guest_cart_returns_user_cart(
        self, client, user_id, user_headers
    ):
        response = client.post(
            f"{API}/cart/merge", headers={**user_headers, **_guest("nothing-here")}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["items"] == []
        assert data["userId"] == str(user_id)

    def test_merge_past_quantity_limit_keeps_guest_cart(
        self, client, make_product, user_headers
    ):
        product = make_product()
        guest = _guest("guest-m4")
        add_to_cart(client, product.id, "S", MAX_QUANTITY, user_headers)
        add_to_cart(client, product.id, "S", 1, guest)

        response = client.post(f"{API}/cart/merge", headers={**user_headers, **guest})
        assert response.status_code == 400
        assert response.json()["message"] == f"Quantity cannot exceed {MAX_QUANTITY}"

        guest_cart = client.get(f"{API}/cart", headers=guest).json()["data"]
        assert guest_cart["items"][0]["quantity"] == 1
        user_cart = client.get(f"{API}/cart", headers=user_headers).json()["data"]
        assert user_cart["items"][0]["quantity"] == MAX_QUANTITY

    def test_merge_rejects_overlong_session_header(self, client, user_headers):
        response = client.post(
            f"{API}/cart/merge", headers={**user_headers, **_guest("y" * 200)}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid session ID"

    def test_merge_requires_authentication(self, client):
        response = client.post(f"{API}/cart/merge", headers=_guest("guest-m3"))
        assert response.status_code == 401

    def test_merge_requires_session_header(self, client, user_headers):
        response = client.post(f"{API}/cart/merge", headers=user_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Session ID is required"

    def test_other_user_is_a_separate_cart(self, client, make_product, user_headers):
        product = make_product()
        add_to_cart(client, product.id, "S", 1, user_headers)

        other = client.get(f"{API}/cart", headers=auth_headers(uuid.uuid4(), "b@example.com"))
        assert other.json()["data"]["items"] == []
