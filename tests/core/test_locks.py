import gc

from storefront.core.locks import LockRegistry


def test_same_user_shares_a_lock():
    locks = LockRegistry()

    lock = locks.for_user("alice")

    assert locks.for_user("alice") is lock
    assert locks.for_user("bob") is not lock


async def test_idle_user_locks_are_released():
    locks = LockRegistry()

    for i in range(100):
        async with locks.for_user(f"user-{i}"):
            pass
    gc.collect()

    assert len(locks._user_locks) == 0


async def test_lock_survives_while_held():
    locks = LockRegistry()

    async with locks.for_user("alice"):
        gc.collect()
        assert locks.for_user("alice").locked()
