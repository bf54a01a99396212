"""Service registry — named invocables registered at setup time.

Each service is a factory. Reading a service (``services.get("db")`` or
``services.db``) calls the factory once and caches the value; ``call``
invokes the factory directly with arguments, for services that are plain
functions::

    services = ServiceRegistry()
    services.register("db", lambda: connect(DSN))
    services.register("slugify", slugify)

    services.db                          # connected once, then cached
    services.call("slugify", "Hello!")   # "hello"
"""

import threading
from collections.abc import Callable, Iterator
from typing import Any

from waypoint.errors import DuplicateServiceError, UnknownServiceError

_UNSET = object()


class ServiceRegistry:
    """A name-to-factory table with lazily cached values.

    Thread safety:
        Registration is setup-time and single-threaded. The first read of
        a service uses a Lock + double-check so the factory runs exactly
        once even when passes read it concurrently.
    """

    __slots__ = ("_factories", "_lock", "_values")

    def __init__(self) -> None:
        object.__setattr__(self, "_factories", {})
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_lock", threading.Lock())

    def register(self, name: str, factory: Callable[..., Any]) -> None:
        """Register *factory* under *name*.

        Raises ``DuplicateServiceError`` if *name* is taken.
        """
        if name in self._factories:
            raise DuplicateServiceError(name)
        if not callable(factory):
            msg = f"Service {name!r} must be callable, got {type(factory).__name__}."
            raise TypeError(msg)
        self._factories[name] = factory

    def get(self, name: str) -> Any:
        """Return the cached value of *name*, creating it on first access."""
        value = self._values.get(name, _UNSET)
        if value is not _UNSET:
            return value
        factory = self._factory(name)
        with self._lock:
            value = self._values.get(name, _UNSET)
            if value is _UNSET:
                value = factory()
                self._values[name] = value
        return value

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the factory registered as *name* with the given arguments."""
        return self._factory(name)(*args, **kwargs)

    def _factory(self, name: str) -> Callable[..., Any]:
        try:
            return self._factories[name]
        except KeyError:
            raise UnknownServiceError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "Use register() to add services."
        raise AttributeError(msg)
