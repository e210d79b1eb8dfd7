"""Session store: creation, reset and per-identity serialization."""

import asyncio

from sessions.store import InMemorySessionStore
from workflows.common import states


class TestInMemorySessionStore:
    def test_get_or_create_starts_in_start_state(self):
        store = InMemorySessionStore()
        assert store.get("+1") is None

        session = store.get_or_create("+1")

        assert session.state == states.START
        assert session.domain_payload is None
        assert session.history == []
        assert store.get_or_create("+1") is session
        assert len(store) == 1

    def test_reset_discards_session(self):
        store = InMemorySessionStore()
        first = store.get_or_create("+1")
        first.state = states.MAIN_MENU

        store.reset("+1")

        assert store.get("+1") is None
        fresh = store.get_or_create("+1")
        assert fresh is not first
        assert fresh.state == states.START

    def test_reset_unknown_identity_is_noop(self):
        store = InMemorySessionStore()
        store.reset("nobody")
        assert len(store) == 0

    def test_all_is_a_snapshot(self):
        store = InMemorySessionStore()
        store.get_or_create("a")
        store.get_or_create("b")

        for session in store.all():
            store.discard(session.identity)

        assert len(store) == 0


class TestSerialization:
    def test_messages_for_one_identity_run_in_arrival_order(self):
        store = InMemorySessionStore()
        order = []

        async def handle(label, delay):
            async with store.session("+1") as session:
                order.append(f"{label}-start")
                await asyncio.sleep(delay)
                session.record(label)
                order.append(f"{label}-end")

        async def run():
            await asyncio.gather(handle("first", 0.02), handle("second", 0.0), handle("third", 0.0))

        asyncio.run(run())

        assert order == [
            "first-start", "first-end",
            "second-start", "second-end",
            "third-start", "third-end",
        ]
        assert [entry.raw_input for entry in store.get("+1").history] == ["first", "second", "third"]

    def test_different_identities_do_not_block_each_other(self):
        store = InMemorySessionStore()
        order = []

        async def slow():
            async with store.session("a"):
                order.append("a-start")
                await asyncio.sleep(0.02)
                order.append("a-end")

        async def fast():
            await asyncio.sleep(0)
            async with store.session("b"):
                order.append("b")

        async def run():
            await asyncio.gather(slow(), fast())

        asyncio.run(run())

        assert order == ["a-start", "b", "a-end"]

    def test_is_busy_while_session_is_held(self):
        store = InMemorySessionStore()
        seen = {}

        async def run():
            async with store.session("+1"):
                seen["inside"] = store.is_busy("+1")
            seen["after"] = store.is_busy("+1")

        asyncio.run(run())

        assert seen == {"inside": True, "after": False}

    def test_discard_drops_idle_lock(self):
        store = InMemorySessionStore()
        store.get_or_create("+1")
        store.lock_for("+1")

        store.discard("+1")

        assert store.get("+1") is None
        assert "+1" not in store._locks

    def test_is_busy_while_a_message_is_queued(self):
        store = InMemorySessionStore()
        seen = {}

        async def holder(release):
            async with store.session("+1"):
                await release.wait()
            # Released, but the queued waiter has not woken yet
            seen["busy_between"] = store.is_busy("+1")

        async def waiter():
            async with store.session("+1"):
                pass

        async def run():
            release = asyncio.Event()
            first = asyncio.create_task(holder(release))
            await asyncio.sleep(0)
            second = asyncio.create_task(waiter())
            await asyncio.sleep(0)
            seen["users"] = store._users["+1"]
            release.set()
            await asyncio.gather(first, second)
            seen["busy_after"] = store.is_busy("+1")

        asyncio.run(run())

        assert seen == {"users": 2, "busy_between": True, "busy_after": False}
