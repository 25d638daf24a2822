"""
Context-function composer.

Loaders and middleware are both context-bound factories: callables taking the
per-request context and returning an object scoped to that request. Every
realization calls every factory again, so nothing cached by a loader can leak
from one request into the next.
"""
import inspect
from collections.abc import Mapping
from typing import Any

import anyio

from graphql_loader.core.errors import FactoryError

NAMESPACES = ("loaders", "middleware")

_KINDS = {"loaders": "loader", "middleware": "middleware"}


def _failed(namespace: str, name: str, exc: Exception) -> FactoryError:
    kind = _KINDS[namespace]
    return FactoryError(kind, name, f"{kind.capitalize()} factory '{name}' failed: {exc}")


def _close(awaitables) -> None:
    for awaitable in awaitables:
        if inspect.iscoroutine(awaitable) and inspect.getcoroutinestate(awaitable) == inspect.CORO_CREATED:
            awaitable.close()


class ContextFunctions:
    """Factories bound once at load time, realized once per request."""

    def __init__(self, loaders: Mapping[str, Any], middleware: Mapping[str, Any]):
        self._factories = {
            "loaders": dict(loaders),
            "middleware": dict(middleware),
        }

    def __call__(self, context: Any) -> dict[str, dict[str, Any]]:
        return {
            namespace: self._realize_sync(namespace, context)
            for namespace in NAMESPACES
        }

    def loaders(self, context: Any) -> dict[str, Any]:
        return self._realize_sync("loaders", context)

    async def realize(self, context: Any) -> dict[str, dict[str, Any]]:
        """Realize every factory, awaiting async ones concurrently.

        Either every factory completes or the first failure is raised; there
        is no partial result.
        """
        realized: dict[str, dict[str, Any]] = {namespace: {} for namespace in NAMESPACES}
        pending: list[tuple[str, str, Any]] = []

        try:
            for namespace in NAMESPACES:
                for name, factory in self._factories[namespace].items():
                    value = self._call(namespace, name, factory, context)
                    if inspect.isawaitable(value):
                        pending.append((namespace, name, value))
                    realized[namespace][name] = value
        except FactoryError:
            _close(awaitable for _, _, awaitable in pending)
            raise

        if not pending:
            return realized

        failures: list[FactoryError] = []

        async with anyio.create_task_group() as tg:

            async def settle(namespace: str, name: str, awaitable: Any) -> None:
                try:
                    realized[namespace][name] = await awaitable
                except Exception as exc:
                    error = _failed(namespace, name, exc)
                    error.__cause__ = exc
                    failures.append(error)
                    tg.cancel_scope.cancel()

            for namespace, name, awaitable in pending:
                tg.start_soon(settle, namespace, name, awaitable)

        # Awaitables the cancelled group never got to
        _close(awaitable for _, _, awaitable in pending)

        if failures:
            raise failures[0]
        return realized

    def _realize_sync(self, namespace: str, context: Any) -> dict[str, Any]:
        realized = {}
        for name, factory in self._factories[namespace].items():
            value = self._call(namespace, name, factory, context)
            if inspect.isawaitable(value):
                _close([value])
                raise FactoryError(
                    _KINDS[namespace],
                    name,
                    f"{_KINDS[namespace].capitalize()} factory '{name}' is async; "
                    "use ContextFunctions.realize()",
                )
            realized[name] = value
        return realized

    @staticmethod
    def _call(namespace: str, name: str, factory: Any, context: Any) -> Any:
        try:
            return factory(context)
        except Exception as exc:
            raise _failed(namespace, name, exc) from exc


def bind(loaders: Mapping[str, Any], middleware: Mapping[str, Any]) -> ContextFunctions:
    return ContextFunctions(loaders, middleware)
