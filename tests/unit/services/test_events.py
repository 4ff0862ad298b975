"""Tests for the conversation event bus."""

import pytest

from orator.services.events import Event, EventBus, NullEventBus


class TestEventBus:
    @pytest.mark.asyncio
    async def test_emit_calls_type_and_global_handlers(self):
        bus = EventBus()
        calls: list[tuple[str, str, dict]] = []

        @bus.on("conversation.started")
        async def typed(event_type, data):
            calls.append(("typed", event_type, data))

        async def everything(event_type, data):
            calls.append(("global", event_type, data))

        bus.subscribe_all(everything)

        event = await bus.emit("conversation.started", {"scenario": "interview"})

        assert isinstance(event, Event)
        assert event.type == "conversation.started"
        assert calls == [
            ("typed", "conversation.started", {"scenario": "interview"}),
            ("global", "conversation.started", {"scenario": "interview"}),
        ]

    @pytest.mark.asyncio
    async def test_handler_failure_is_isolated(self):
        bus = EventBus()
        received: list[dict] = []

        @bus.on("conversation.ended")
        async def broken(event_type, data):
            raise RuntimeError("boom")

        @bus.on("conversation.ended")
        async def working(event_type, data):
            received.append(data)

        await bus.emit("conversation.ended", {"message_count": 4})

        assert received == [{"message_count": 4}]

    @pytest.mark.asyncio
    async def test_try_emit_delivers_in_order(self):
        bus = EventBus()
        received: list[int] = []

        async def record(event_type, data):
            received.append(data["n"])

        bus.subscribe_all(record)

        for n in range(5):
            bus.try_emit("conversation.message_appended", {"n": n})
        await bus.wait_for_pending()

        assert received == [0, 1, 2, 3, 4]

    def test_try_emit_without_loop_is_noop(self):
        bus = EventBus()

        bus.try_emit("conversation.started", {})

        assert not bus._pending

    @pytest.mark.asyncio
    async def test_off(self):
        bus = EventBus()

        @bus.on("conversation.started")
        async def first(event_type, data):
            pass

        @bus.on("conversation.started")
        async def second(event_type, data):
            pass

        bus.off("conversation.started", first)
        assert bus.get_handlers("conversation.started") == [second]

        bus.off("conversation.started")
        assert bus.get_handlers("conversation.started") == []

    def test_clear(self):
        bus = EventBus()

        @bus.on("conversation.started")
        async def handler(event_type, data):
            pass

        bus.subscribe_all(handler)
        bus.clear()

        assert bus.get_handlers("conversation.started") == []
        assert bus._global_handlers == []

    def test_event_to_dict(self):
        event = Event(type="conversation.ended", data={"message_count": 3})

        payload = event.to_dict()

        assert payload["type"] == "conversation.ended"
        assert payload["data"] == {"message_count": 3}
        assert payload["id"] == event.id
        assert payload["timestamp"] == event.timestamp.isoformat()


class TestNullEventBus:
    @pytest.mark.asyncio
    async def test_discards_events(self):
        bus = NullEventBus()
        received: list[str] = []

        async def record(event_type, data):
            received.append(event_type)

        bus.subscribe_all(record)
        bus.try_emit("conversation.started", {})
        await bus.emit("conversation.started", {})
        await bus.wait_for_pending()

        assert received == []
