# tests/test_events.py
from __future__ import annotations

import pytest

from tetris_engine.game.core.events import BoardEvent, EventBus
from tetris_engine.game.scoring import ScoreEvent


def test_handlers_called_in_subscription_order() -> None:
    bus: EventBus[BoardEvent] = EventBus(BoardEvent)
    seen: list[tuple[str, object]] = []
    bus.subscribe(BoardEvent.ROW_CLEARED, lambda v: seen.append(("a", v)))
    bus.subscribe(BoardEvent.ROW_CLEARED, lambda v: seen.append(("b", v)))
    bus.subscribe(BoardEvent.GAME_OVER, lambda v: seen.append(("c", v)))

    bus.publish(BoardEvent.ROW_CLEARED, True)

    assert seen == [("a", True), ("b", True)]


def test_unsubscribe_handle_and_method() -> None:
    bus: EventBus[BoardEvent] = EventBus(BoardEvent)
    seen: list[object] = []

    def handler(v: object) -> None:
        seen.append(v)

    unsub = bus.subscribe(BoardEvent.GAME_OVER, handler)
    unsub()
    bus.publish(BoardEvent.GAME_OVER, True)
    assert seen == []
    assert bus.unsubscribe(BoardEvent.GAME_OVER, handler) is False

    bus.subscribe(BoardEvent.GAME_OVER, handler)
    assert bus.handlers(BoardEvent.GAME_OVER) == (handler,)
    assert bus.unsubscribe(BoardEvent.GAME_OVER, handler) is True


def test_handler_may_unsubscribe_itself_while_publishing() -> None:
    bus: EventBus[BoardEvent] = EventBus(BoardEvent)
    calls: list[str] = []
    unsub_holder: list = []

    def once(_v: object) -> None:
        calls.append("once")
        unsub_holder[0]()

    unsub_holder.append(bus.subscribe(BoardEvent.BOARD_CHANGED, once))
    bus.subscribe(BoardEvent.BOARD_CHANGED, lambda _v: calls.append("always"))

    bus.publish(BoardEvent.BOARD_CHANGED)
    bus.publish(BoardEvent.BOARD_CHANGED)

    assert calls == ["once", "always", "always"]


def test_bus_rejects_foreign_events_and_non_callables() -> None:
    bus: EventBus[BoardEvent] = EventBus(BoardEvent)
    with pytest.raises(TypeError, match="BoardEvent"):
        bus.subscribe(ScoreEvent.SCORE_CHANGED, lambda _v: None)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="callable"):
        bus.subscribe(BoardEvent.GAME_OVER, "nope")  # type: ignore[arg-type]
