"""Ordered startup and shutdown hooks for the FastAPI lifespan.

Hooks register under a name with a startup order and the names they
require. Startup runs them in dependency order; shutdown runs the hooks
that actually started, in reverse.
"""

from __future__ import annotations

import logging
from collections.abc import Callable  # noqa: TC003
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

Hook = Callable[..., "Awaitable[None]"]


class LifecycleHook:
    """A startup or shutdown coroutine with its ordering metadata."""

    def __init__(self, name: str, func: Hook, order: int, requires: list[str]) -> None:
        self.name = name
        self.func = func
        self.startup_order = order
        self.requires = requires

    async def execute(self, **kwargs: Any) -> None:
        await self.func(**kwargs)


class LifecycleRegistry:
    """Registry of lifespan hooks.

    Example:
        registry = LifecycleRegistry()

        @registry.register(name="database", startup_order=10, requires=["core"])
        async def startup_database(db_settings: PostgresSettings, **kwargs) -> None:
            await get_database().connect()

        @registry.register(name="database")
        async def shutdown_database(**kwargs) -> None:
            await get_database().disconnect()

        await registry.startup(**settings)
        ...
        await registry.shutdown(**settings)
    """

    def __init__(self) -> None:
        self._startup_hooks: dict[str, LifecycleHook] = {}
        self._shutdown_hooks: dict[str, LifecycleHook] = {}
        # names in the order they finished starting
        self._started: list[str] = []

    def register(
        self,
        name: str,
        startup_order: int = 50,
        requires: list[str] | None = None,
    ) -> Callable[[Hook], Hook]:
        """Decorator registering a startup or shutdown hook.

        Functions named ``shutdown_*`` (or ``*_shutdown``) are shutdown hooks,
        anything else is a startup hook. Startup and shutdown hooks of one
        component share ``name``.

        Raises:
            ValueError: A hook of the same kind is already registered under ``name``.
        """
        requires_list = requires or []

        def decorator(func: Hook) -> Hook:
            func_name = func.__name__.lower()
            is_shutdown = func_name.startswith("shutdown") or func_name.endswith("_shutdown")
            hooks = self._shutdown_hooks if is_shutdown else self._startup_hooks
            if name in hooks:
                kind = "Shutdown" if is_shutdown else "Startup"
                msg = f"{kind} hook '{name}' already registered"
                raise ValueError(msg)
            hooks[name] = LifecycleHook(name, func, startup_order, requires_list)
            return func

        return decorator

    def _resolve_startup_order(self) -> list[str]:
        """Topological order of startup hooks, ties broken by ``startup_order``.

        Raises:
            ValueError: Circular or missing dependency.
        """
        ordered: list[str] = []
        visiting: set[str] = set()

        def visit(name: str) -> None:
            if name in ordered:
                return
            if name in visiting:
                msg = f"Circular dependency detected at '{name}'"
                raise ValueError(msg)
            visiting.add(name)
            for dep in self._startup_hooks[name].requires:
                if dep not in self._startup_hooks:
                    msg = f"Hook '{name}' requires '{dep}' but it's not registered"
                    raise ValueError(msg)
                visit(dep)
            visiting.discard(name)
            ordered.append(name)

        for name in sorted(self._startup_hooks, key=lambda n: self._startup_hooks[n].startup_order):
            visit(name)
        return ordered

    def _resolve_shutdown_order(self) -> list[str]:
        return [name for name in reversed(self._started) if name in self._shutdown_hooks]

    async def startup(self, **kwargs: Any) -> None:
        """Run startup hooks in dependency order; the first failure propagates."""
        for name in self._resolve_startup_order():
            hook = self._startup_hooks[name]
            try:
                logger.debug("Starting %s...", name)
                await hook.execute(**kwargs)
                self._started.append(name)
            except Exception as e:
                logger.error("Failed to start %s: %s", name, e, exc_info=True)
                raise

    async def shutdown(self, **kwargs: Any) -> None:
        """Run shutdown hooks of started components; failures are logged and skipped."""
        for name in self._resolve_shutdown_order():
            try:
                logger.debug("Shutting down %s...", name)
                await self._shutdown_hooks[name].execute(**kwargs)
            except Exception as e:
                logger.warning("Error shutting down %s: %s", name, e, exc_info=True)
        self._started.clear()

    def clear(self) -> None:
        """Drop all hooks (tests)."""
        self._startup_hooks.clear()
        self._shutdown_hooks.clear()
        self._started.clear()


lifespan_registry = LifecycleRegistry()

__all__ = ["LifecycleHook", "LifecycleRegistry", "lifespan_registry"]
