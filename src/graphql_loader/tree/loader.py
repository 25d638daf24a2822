"""
Module tree loader.

Mirrors a directory as nested dicts: directories become dicts keyed by their
name, recognized files become leaves keyed by their stem. ``.graphql`` files
load as text and ``.py`` files are executed and reduced to their exports.
"""
import importlib.util
import logging
import sys
import types
import uuid
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from graphql_loader.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("py", "graphql")


def load_tree(root: str | Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> dict[str, Any]:
    """Load ``root`` into a nested mapping.

    Args:
        root: Directory to walk.
        extensions: File extensions to pick up, without the leading dot.
            Anything else is ignored.

    Raises:
        ConfigurationError: if ``root`` is not a directory or a module fails
            to execute.
    """
    root = Path(root)
    if not root.is_dir():
        raise ConfigurationError(f"Cannot load {root}: not a directory")

    suffixes = {"." + ext.lstrip(".") for ext in extensions}
    # One namespace per call so repeated loads never share module objects
    namespace = f"_graphql_loader_{uuid.uuid4().hex}"
    return _load_dir(root, suffixes, namespace)


def _is_ignored(path: Path) -> bool:
    # dotfiles, __pycache__, __init__.py and friends
    return path.name.startswith(".") or path.stem.startswith("__")


def _load_dir(directory: Path, suffixes: set[str], namespace: str) -> dict[str, Any]:
    node: dict[str, Any] = {}

    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if _is_ignored(path):
            continue

        if path.is_dir():
            key = path.name
            value = _load_dir(path, suffixes, f"{namespace}.{key}")
        elif path.suffix in suffixes:
            key = path.stem
            value = _load_file(path, f"{namespace}.{key}")
        else:
            continue

        if key in node:
            existing = node[key]
            if isinstance(existing, dict) and isinstance(value, dict):
                node[key] = {**existing, **value}
                continue
            logger.warning("Duplicate entry %s in %s, keeping %s", key, directory, path.name)

        node[key] = value

    return node


def _load_file(path: Path, module_name: str) -> Any:
    if path.suffix == ".py":
        return _load_module(path, module_name)
    return path.read_text(encoding="utf-8")


def _load_module(path: Path, module_name: str) -> Any:
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot import {path}")

    module = importlib.util.module_from_spec(spec)
    # Only registered while the module body runs
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigurationError(f"Failed to load {path}: {exc}") from exc
    finally:
        sys.modules.pop(module_name, None)

    # resolver.py exporting `resolver`, schema.py exporting `schema`, ...
    if hasattr(module, path.stem):
        return getattr(module, path.stem)
    return _exports(module)


def _exports(module: types.ModuleType) -> dict[str, Any]:
    names = getattr(module, "__all__", None)
    if names is not None:
        return {name: getattr(module, name) for name in names}

    exports = {}
    for name, value in vars(module).items():
        if name.startswith("_") or isinstance(value, types.ModuleType):
            continue
        # Skip helpers imported from elsewhere
        if callable(value) and getattr(value, "__module__", module.__name__) != module.__name__:
            continue
        exports[name] = value
    return exports
