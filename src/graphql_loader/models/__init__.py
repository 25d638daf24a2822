from graphql_loader.models.entry import ROOT_OPERATION_TYPES, OperationDef, TypeEntry
from graphql_loader.models.result import AggregateResult

__all__ = ["ROOT_OPERATION_TYPES", "OperationDef", "TypeEntry", "AggregateResult"]
