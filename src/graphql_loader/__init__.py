"""Aggregate a folder-per-type GraphQL API into schema documents, resolvers and request factories."""
from graphql_loader.aggregator.context import ContextFunctions, bind
from graphql_loader.core.errors import (
    ConfigurationError,
    FactoryError,
    GraphQLLoaderError,
    SchemaParseError,
)
from graphql_loader.loader import aggregate, load
from graphql_loader.models import AggregateResult

__all__ = [
    "AggregateResult",
    "ConfigurationError",
    "ContextFunctions",
    "FactoryError",
    "GraphQLLoaderError",
    "SchemaParseError",
    "aggregate",
    "bind",
    "load",
]
