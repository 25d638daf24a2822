"""
Type-folder reducer.

Folds the top-level entries of a loaded API tree into schema documents, a
resolver map and the loader/middleware registries, and records which root
operation types received at least one operation.
"""
import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from graphql import DocumentNode
from pydantic import ValidationError

from graphql_loader.aggregator.parser import parse_schema
from graphql_loader.core.errors import ConfigurationError
from graphql_loader.models.entry import TypeEntry

logger = logging.getLogger(__name__)


class Reduction(NamedTuple):
    type_defs: list[DocumentNode]
    resolvers: dict[str, dict[str, Any]]
    loaders: dict[str, Any]
    middleware: dict[str, Any]
    root_types: set[str]
    debug_names: dict[str, str]


def extend_fragment(text: str) -> str:
    """Turn an operation fragment into an extension of its root type."""
    text = text.strip()
    if not text.startswith("extend"):
        text = "extend " + text
    return text


def reduce_tree(tree: Mapping[str, Any]) -> Reduction:
    if not tree:
        raise ConfigurationError("Nothing to load: the API tree is empty")

    out = Reduction([], {}, {}, {}, set(), {})

    for type_name, node in tree.items():
        if not isinstance(node, Mapping):
            logger.debug("Skipping top-level leaf %s", type_name)
            continue

        try:
            entry = TypeEntry.from_node(type_name, dict(node))
        except ValidationError as exc:
            raise ConfigurationError(f"Malformed type entry '{type_name}': {exc}") from exc

        _reduce_entry(entry, out)

    return out


def _reduce_entry(entry: TypeEntry, out: Reduction) -> None:
    logger.debug("Reducing type entry %s", entry.name)

    if entry.schema_:
        out.type_defs.append(parse_schema(entry.schema_, entry.name))

    if entry.resolvers:
        type_resolvers = out.resolvers.setdefault(entry.name, {})
        for field_name, resolver in entry.resolvers.items():
            if callable(resolver):
                out.debug_names[f"{entry.name}.{field_name}"] = (
                    f"Resolver_{entry.name}_{field_name}"
                )
            type_resolvers[field_name] = resolver

    # Last write wins across every entry, not just within this one
    out.loaders.update(entry.loaders)
    out.middleware.update(entry.middleware)

    for group, op_name, op in entry.operations():
        if op.is_inert:
            continue

        out.root_types.add(group)

        if op.schema_:
            out.type_defs.append(
                parse_schema(extend_fragment(op.schema_), f"{entry.name}.{group}.{op_name}")
            )

        if op.resolver is not None:
            out.resolvers.setdefault(group, {})[op_name] = op.resolver
            out.debug_names[f"{group}.{op_name}"] = f"{group}_{entry.name}_{op_name}"
