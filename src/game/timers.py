# src/game/timers.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

@dataclass(eq=False)
class TimerEvent:
    delay_ms: float
    callback: Callable[[], None]
    due_ms: float
    loop: bool = False
    removed: bool = False

    def remove(self):
        """Cancel the event; a removed event never fires again."""
        self.removed = True


class Scheduler:
    """
    Scene clock. Time only moves through advance(), so a paused scene
    (whose clock is not advanced) never fires its events.
    """
    def __init__(self):
        self.now_ms: float = 0.0
        self.events: List[TimerEvent] = []

    def schedule_once(self, delay_ms: float, callback: Callable[[], None]) -> TimerEvent:
        ev = TimerEvent(delay_ms=float(delay_ms), callback=callback,
                        due_ms=self.now_ms + float(delay_ms), loop=False)
        self.events.append(ev)
        return ev

    def schedule_repeating(self, delay_ms: float, callback: Callable[[], None]) -> TimerEvent:
        if delay_ms <= 0:
            raise ValueError(f"repeating delay must be > 0, got {delay_ms}")
        ev = TimerEvent(delay_ms=float(delay_ms), callback=callback,
                        due_ms=self.now_ms + float(delay_ms), loop=True)
        self.events.append(ev)
        return ev

    def _next_due(self) -> Optional[TimerEvent]:
        due = [e for e in self.events if not e.removed and e.due_ms <= self.now_ms]
        if not due:
            return None
        return min(due, key=lambda e: e.due_ms)

    def advance(self, dt_ms: float):
        """Move the clock forward and fire everything that came due, in due order."""
        self.now_ms += float(dt_ms)
        while True:
            ev = self._next_due()
            if ev is None:
                break
            if ev.loop:
                ev.due_ms += ev.delay_ms
            else:
                ev.removed = True
            ev.callback()
        self.events = [e for e in self.events if not e.removed]

    @property
    def pending(self) -> int:
        return sum(1 for e in self.events if not e.removed)

    def clear(self):
        for ev in self.events:
            ev.remove()
        self.events.clear()
