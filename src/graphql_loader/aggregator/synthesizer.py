"""Root-type synthesizer: declares the populated root operation types."""
from collections.abc import Iterable

from graphql import DocumentNode

from graphql_loader.aggregator.parser import parse_schema
from graphql_loader.core.errors import ConfigurationError
from graphql_loader.models.entry import ROOT_OPERATION_TYPES


def build_root_schema(root_types: Iterable[str]) -> str:
    """Schema text for the root types, always in Query, Mutation, Subscription order."""
    root_types = set(root_types)

    unknown = root_types.difference(ROOT_OPERATION_TYPES)
    if unknown:
        raise ConfigurationError(f"Unknown root operation types: {', '.join(sorted(unknown))}")
    if not root_types:
        raise ConfigurationError(
            "No Query, Mutation or Subscription operations found; "
            "a GraphQL API needs at least a Query"
        )

    ordered = [name for name in ROOT_OPERATION_TYPES if name in root_types]

    lines = [f"type {name}" for name in ordered]
    lines.append("schema {")
    lines.extend(f"  {name.lower()}: {name}" for name in ordered)
    lines.append("}")
    return "\n".join(lines) + "\n"


def synthesize(root_types: Iterable[str]) -> DocumentNode:
    return parse_schema(build_root_schema(root_types), "schema")
