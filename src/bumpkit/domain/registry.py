"""Registry resolving handler identifiers to their capability sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from importlib.metadata import entry_points
from logging import getLogger

from bumpkit.domain.ports.handlers import Handler

log = getLogger(__name__)

HANDLER_ENTRY_POINT_GROUP = "bumpkit.handlers"


class HandlerRegistry:
    """Read-only lookup table from handler identifier to ``Handler``.

    Identifiers without a registered handler resolve to an empty capability
    set, which routes their upgrades to plain text replacement and skips
    artifact generation.
    """

    def __init__(self, handlers: Iterable[Handler] = ()) -> None:
        self._handlers: dict[str, Handler] = {}
        for handler in handlers:
            self.register(handler)

    def register(self, handler: Handler) -> None:
        if handler.name in self._handlers:
            raise ValueError(f"Handler already registered: {handler.name}")
        self._handlers[handler.name] = handler

    def resolve(self, name: str) -> Handler:
        handler = self._handlers.get(name)
        if handler is None:
            return Handler(name=name)
        return handler

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[Handler]:
        return iter(self._handlers.values())

    def __len__(self) -> int:
        return len(self._handlers)

    @classmethod
    def from_entry_points(cls, group: str = HANDLER_ENTRY_POINT_GROUP) -> HandlerRegistry:
        """Discover handlers published by installed distributions."""

        registry = cls()
        for entry_point in entry_points(group=group):
            loaded = entry_point.load()
            handler = loaded() if callable(loaded) and not isinstance(loaded, Handler) else loaded
            if not isinstance(handler, Handler):
                raise TypeError(
                    f"Entry point {entry_point.name} in {group} did not provide a Handler"
                )
            log.debug("Registered handler %s from %s", handler.name, entry_point.value)
            registry.register(handler)
        return registry
