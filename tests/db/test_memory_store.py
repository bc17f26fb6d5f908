import pytest

from storefront.schemas import Cart, CartItem, DiscountCode


class TestCarts:
    async def test_cart_created_lazily(self, store):
        assert await store.get_or_create_cart("user-1") == Cart()

    async def test_save_replaces_cart(self, store):
        cart = Cart(items=[CartItem(product_id="p1", name="Widget", unit_price=1.0, quantity=2)], applied_discount_code="X")
        await store.save_cart("user-1", cart)

        assert await store.get_or_create_cart("user-1") == cart

    async def test_clear_resets_items_and_code(self, store):
        await store.save_cart("user-1", Cart(items=[CartItem(product_id="p1", name="Widget", unit_price=1.0, quantity=2)], applied_discount_code="X"))

        await store.clear_cart("user-1")

        assert await store.get_or_create_cart("user-1") == Cart()


class TestOrders:
    async def test_record_order_advances_counter(self, store, make_order):
        assert await store.current_order_count() == 0
        assert await store.record_order(make_order()) == 1
        assert await store.record_order(make_order()) == 2
        assert await store.current_order_count() == 2

    async def test_list_orders_keeps_recording_order(self, store, make_order):
        first, second, third = make_order("alice"), make_order("bob"), make_order("alice")
        for order in (first, second, third):
            await store.record_order(order)

        assert [order.id for order in await store.list_orders()] == [first.id, second.id, third.id]
        assert [order.id for order in await store.list_orders("alice")] == [first.id, third.id]

    async def test_complete_checkout(self, store, make_order):
        await store.add_discount_code(DiscountCode(code="DISC10_3", discount_percent=10))
        await store.save_cart("alice", Cart(items=[CartItem(product_id="p1", name="Widget", unit_price=50.0, quantity=1)], applied_discount_code="DISC10_3"))

        order = make_order("alice", unit_price=50.0, discount_amount=5.0, discount_code="DISC10_3")
        assert await store.complete_checkout("alice", order) == 1

        assert [stored.id for stored in await store.list_orders()] == [order.id]
        assert (await store.find_discount_code("DISC10_3")).is_used is True
        assert await store.get_or_create_cart("alice") == Cart()

    async def test_stats(self, store, make_order):
        await store.record_order(make_order(unit_price=10.0, quantity=3))
        await store.record_order(make_order(unit_price=50.0, quantity=1, discount_amount=5.0, discount_code="DISC10_3"))

        stats = await store.compute_stats()

        assert stats.total_items_purchased == 4
        assert stats.total_purchase_amount == pytest.approx(80.0)
        assert stats.total_discount_amount == pytest.approx(5.0)


class TestDiscountCodes:
    async def test_find_and_mark_used(self, store):
        await store.add_discount_code(DiscountCode(code="DISC10_3", discount_percent=10))

        await store.mark_discount_code_used("DISC10_3")

        assert (await store.find_discount_code("DISC10_3")).is_used is True

    async def test_mark_unknown_code_is_ignored(self, store):
        await store.mark_discount_code_used("NOPE")
        assert await store.find_discount_code("NOPE") is None

    async def test_used_flag_never_reverts(self, store):
        await store.add_discount_code(DiscountCode(code="DISC10_3", discount_percent=10))
        await store.mark_discount_code_used("DISC10_3")

        await store.add_discount_code(DiscountCode(code="DISC10_3", discount_percent=10, is_used=False))

        assert (await store.find_discount_code("DISC10_3")).is_used is True

    async def test_stats_snapshot_is_detached(self, store):
        await store.add_discount_code(DiscountCode(code="DISC10_3", discount_percent=10))

        stats = await store.compute_stats()
        stats.discount_codes[0].is_used = True

        assert (await store.find_discount_code("DISC10_3")).is_used is False
