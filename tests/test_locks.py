import asyncio

import pytest

from app.core.exceptions import BusyError
from app.core.locks import ItemLockRegistry


@pytest.mark.asyncio
async def test_same_item_is_serialized():
    locks = ItemLockRegistry()
    order = []

    async def worker(name):
        async with locks.hold("item-1", timeout=1):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert order in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


@pytest.mark.asyncio
async def test_different_items_do_not_block_each_other():
    locks = ItemLockRegistry()

    async with locks.hold("item-1", timeout=1):
        async with locks.hold("item-2", timeout=0.05):
            assert len(locks) == 2


@pytest.mark.asyncio
async def test_timeout_raises_busy():
    locks = ItemLockRegistry()

    async with locks.hold("item-1", timeout=1):
        with pytest.raises(BusyError) as excinfo:
            async with locks.hold("item-1", timeout=0.01):
                pass

    assert excinfo.value.item_id == "item-1"
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_locks_are_released_and_dropped():
    locks = ItemLockRegistry()

    with pytest.raises(RuntimeError):
        async with locks.hold("item-1", timeout=1):
            raise RuntimeError("boom")

    assert len(locks) == 0
    async with locks.hold("item-1", timeout=0.01):
        pass
    assert len(locks) == 0
