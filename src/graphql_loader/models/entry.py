"""
Typed views over the nested mapping produced by the module tree loader.

Only the conventional keys are read; anything else in a node is ignored so
new files can sit next to a type without breaking the load.
"""
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

ROOT_OPERATION_TYPES = ("Query", "Mutation", "Subscription")


class OperationDef(BaseModel):
    """One query, mutation or subscription: a schema fragment and/or its resolver."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    schema_: str | None = Field(default=None, alias="schema")
    resolver: Callable[..., Any] | None = None

    @property
    def is_inert(self) -> bool:
        return not self.schema_ and self.resolver is None


class TypeEntry(BaseModel):
    """A top-level type folder (or module) and everything nested under it."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str
    schema_: str | None = Field(default=None, alias="schema")
    resolvers: dict[str, Any] = {}
    loaders: dict[str, Callable[..., Any]] = {}
    middleware: dict[str, Callable[..., Any]] = {}

    Query: dict[str, OperationDef] = {}
    Mutation: dict[str, OperationDef] = {}
    Subscription: dict[str, OperationDef] = {}

    @field_validator("Query", "Mutation", "Subscription", mode="before")
    @classmethod
    def drop_leaves(cls, value: Any, info: ValidationInfo) -> Any:
        # Stray files under an operation group are inert, like any unknown key
        if not isinstance(value, Mapping):
            logger.debug("Skipping non-mapping %s group", info.field_name)
            return {}
        operations = {}
        for op_name, op in value.items():
            if isinstance(op, Mapping):
                operations[op_name] = op
            else:
                logger.debug("Skipping leaf %s.%s", info.field_name, op_name)
        return operations

    @classmethod
    def from_node(cls, name: str, node: dict[str, Any]) -> "TypeEntry":
        # The folder name always wins over a stray "name" key in the node
        return cls.model_validate({**node, "name": name})

    def operations(self):
        """Yield (group, operation name, definition) in traversal order."""
        for group in ROOT_OPERATION_TYPES:
            for op_name, op in getattr(self, group).items():
                yield group, op_name, op
