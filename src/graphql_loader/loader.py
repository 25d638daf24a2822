"""
Entry point: load an API tree from disk and aggregate it.

    from graphql_loader import load

    api = load("./types")
    schema = make_executable_schema(api)
"""
import inspect
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from graphql_loader.aggregator.context import bind
from graphql_loader.aggregator.reducer import reduce_tree
from graphql_loader.aggregator.synthesizer import synthesize
from graphql_loader.core.errors import ConfigurationError
from graphql_loader.models.entry import ROOT_OPERATION_TYPES
from graphql_loader.models.result import AggregateResult
from graphql_loader.tree.loader import DEFAULT_EXTENSIONS, load_tree

logger = logging.getLogger(__name__)


def aggregate(tree: Mapping[str, Any]) -> AggregateResult:
    """Merge an already-loaded API tree into schema documents, resolvers and factories."""
    reduction = reduce_tree(tree)

    type_defs = reduction.type_defs
    type_defs.append(synthesize(reduction.root_types))

    return AggregateResult(
        type_defs=tuple(type_defs),
        resolvers=reduction.resolvers,
        loaders=reduction.loaders,
        middleware=reduction.middleware,
        get_context_fns=bind(reduction.loaders, reduction.middleware),
        root_types=tuple(name for name in ROOT_OPERATION_TYPES if name in reduction.root_types),
        debug_names=reduction.debug_names,
    )


def load(
    path: str | os.PathLike,
    *,
    base_dir: str | os.PathLike | None = None,
    extensions=DEFAULT_EXTENSIONS,
) -> AggregateResult:
    """Load the API tree at ``path`` and aggregate it.

    Relative paths resolve against ``base_dir``, defaulting to the directory
    of the module that called ``load``.
    """
    if not path:
        raise ConfigurationError("A path to load must be specified.")

    if base_dir is None:
        base_dir = caller_dir()
    root = (Path(base_dir) / path).resolve()

    tree = load_tree(root, extensions)
    if not tree:
        raise ConfigurationError(f"Nothing to load in {root}")

    result = aggregate(tree)
    logger.info(
        "Loaded %s: %d type entries, %d schema documents, root types %s",
        root,
        len(tree),
        len(result.type_defs),
        ", ".join(result.root_types),
    )
    return result


def caller_dir() -> Path:
    """Directory of the module that called the function calling this one."""
    # Two frames up: caller_dir <- load or create_app <- caller
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        filename = caller.f_code.co_filename if caller else None
    finally:
        del frame

    if not filename or filename.startswith("<"):
        return Path.cwd()
    return Path(filename).resolve().parent
