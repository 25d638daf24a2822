from typing import Any

from graphql import GraphQLObjectType, GraphQLSchema, build_ast_schema, concat_ast

from graphql_loader.core.errors import ConfigurationError
from graphql_loader.models.result import AggregateResult


def make_executable_schema(result: AggregateResult) -> GraphQLSchema:
    """Build a graphql-core schema from the aggregated documents and bind resolvers."""
    schema = build_ast_schema(concat_ast(result.type_defs))

    for type_name, fields in result.resolvers.items():
        graphql_type = schema.get_type(type_name)
        if not isinstance(graphql_type, GraphQLObjectType):
            raise ConfigurationError(
                f"Resolvers registered for '{type_name}', which is not an object type in the schema"
            )

        for field_name, resolver in fields.items():
            field = graphql_type.fields.get(field_name)
            if field is None:
                raise ConfigurationError(
                    f"Resolver registered for unknown field '{type_name}.{field_name}'"
                )
            if callable(resolver):
                field.resolve = resolver

    return schema


async def get_context(result: AggregateResult, request: Any) -> dict[str, Any]:
    """
    Build the per-request context.

    Loaders and middleware are realized fresh for every request so a loader's
    cache never outlives the request that filled it.
    """
    return {
        "request": request,
        **await result.get_context_fns.realize(request),
    }
