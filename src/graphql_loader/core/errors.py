"""Errors raised while aggregating a GraphQL API tree or realizing its context."""
from graphql import GraphQLError


class GraphQLLoaderError(Exception):
    """Base class for every error raised by graphql_loader."""


class ConfigurationError(GraphQLLoaderError):
    """The tree to load is missing, empty, malformed, or declares no root type."""


class SchemaParseError(GraphQLLoaderError):
    """A schema fragment failed to parse.

    ``location`` names where the fragment came from, e.g. ``Book`` for a
    type's own schema or ``Book.Query.books`` for an operation schema.
    """

    def __init__(self, location: str, error: GraphQLError):
        self.location = location
        self.error = error
        super().__init__(f"Invalid schema in {location}: {error.message}")


class FactoryError(GraphQLLoaderError):
    """A loader or middleware factory failed while realizing a request context."""

    def __init__(self, kind: str, name: str, message: str | None = None):
        self.kind = kind
        self.name = name
        super().__init__(message or f"{kind.capitalize()} factory '{name}' failed")
