from graphql import DocumentNode, GraphQLError, Source, parse

from graphql_loader.core.errors import SchemaParseError


def parse_schema(text: str, location: str) -> DocumentNode:
    """Parse schema language text, tagging syntax errors with where it came from."""
    try:
        return parse(Source(text, location))
    except GraphQLError as exc:
        raise SchemaParseError(location, exc) from exc
