from dataclasses import dataclass, field
from typing import Any

from graphql import DocumentNode

from graphql_loader.aggregator.context import ContextFunctions


@dataclass(frozen=True)
class AggregateResult:
    """Everything a GraphQL server needs from one load of an API tree."""

    type_defs: tuple[DocumentNode, ...]
    resolvers: dict[str, dict[str, Any]]
    loaders: dict[str, Any]
    middleware: dict[str, Any]
    get_context_fns: ContextFunctions
    root_types: tuple[str, ...] = ()
    debug_names: dict[str, str] = field(default_factory=dict)

    def get_loaders(self, context: Any) -> dict[str, Any]:
        """Realize the loaders only, for servers that predate middleware."""
        return self.get_context_fns.loaders(context)
