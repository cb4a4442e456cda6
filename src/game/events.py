# src/game/events.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

@dataclass(eq=False)
class Subscription:
    emitter: "EventEmitter"
    name: str
    handler: Callable[..., Any]
    active: bool = True

    def cancel(self):
        if self.active:
            self.active = False
            self.emitter._remove(self)


class EventEmitter:
    def __init__(self):
        self._subs: Dict[str, List[Subscription]] = {}

    def on(self, name: str, handler: Callable[..., Any]) -> Subscription:
        sub = Subscription(self, name, handler)
        self._subs.setdefault(name, []).append(sub)
        return sub

    def emit(self, name: str, *args, **kwargs) -> int:
        """Call every handler registered for name; returns how many ran."""
        ran = 0
        for sub in list(self._subs.get(name, ())):
            if sub.active:
                sub.handler(*args, **kwargs)
                ran += 1
        return ran

    def listener_count(self, name: str) -> int:
        return len(self._subs.get(name, ()))

    def _remove(self, sub: Subscription):
        subs = self._subs.get(sub.name)
        if subs and sub in subs:
            subs.remove(sub)

    def clear(self):
        for subs in self._subs.values():
            for sub in subs:
                sub.active = False
        self._subs.clear()
