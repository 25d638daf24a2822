import sys

import pytest

from graphql_loader.core.errors import ConfigurationError
from graphql_loader.tree.loader import load_tree


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_directories_become_nested_mappings(tmp_path):
    write(tmp_path / "Book" / "schema.graphql", "type Book { title: String }\n")
    write(tmp_path / "Book" / "Query" / "books" / "schema.graphql", "type Query { books: [Book] }\n")

    tree = load_tree(tmp_path)

    assert tree == {
        "Book": {
            "Query": {"books": {"schema": "type Query { books: [Book] }\n"}},
            "schema": "type Book { title: String }\n",
        },
    }


def test_entries_are_sorted_by_name(tmp_path):
    for name in ("Zebra", "Ant", "Moth"):
        write(tmp_path / name / "schema.graphql", f"type {name} {{ id: ID }}")

    assert list(load_tree(tmp_path)) == ["Ant", "Moth", "Zebra"]


def test_module_exporting_its_own_name(tmp_path):
    write(tmp_path / "Book" / "Query" / "books" / "resolver.py", "def resolver(_, info):\n    return []\n")

    tree = load_tree(tmp_path)

    resolver = tree["Book"]["Query"]["books"]["resolver"]
    assert callable(resolver)
    assert resolver(None, None) == []


def test_module_exports_public_names(tmp_path):
    write(
        tmp_path / "Book" / "resolvers.py",
        "import os\n"
        "from os.path import join\n"
        "\n"
        "PREFIX = 'Book'\n"
        "\n"
        "def title(book, info):\n"
        "    return book['title']\n"
        "\n"
        "def _helper():\n"
        "    pass\n",
    )

    resolvers = load_tree(tmp_path)["Book"]["resolvers"]

    assert set(resolvers) == {"PREFIX", "title"}


def test_module_all_is_honoured(tmp_path):
    write(
        tmp_path / "Book" / "loaders.py",
        "__all__ = ['books']\n"
        "\n"
        "def books(context):\n"
        "    return []\n"
        "\n"
        "def authors(context):\n"
        "    return []\n",
    )

    assert set(load_tree(tmp_path)["Book"]["loaders"]) == {"books"}


def test_unrecognized_and_hidden_files_are_ignored(tmp_path):
    write(tmp_path / "Book" / "schema.graphql", "type Book { id: ID }")
    write(tmp_path / "Book" / "notes.md", "ignored")
    write(tmp_path / "Book" / "__init__.py", "raise RuntimeError('never executed')\n")
    write(tmp_path / ".git" / "HEAD", "ref: refs/heads/main")
    write(tmp_path / "Book" / "__pycache__" / "schema.graphql", "ignored")

    assert load_tree(tmp_path) == {"Book": {"schema": "type Book { id: ID }"}}


def test_custom_extensions(tmp_path):
    write(tmp_path / "Book" / "schema.gql", "type Book { id: ID }")
    write(tmp_path / "Book" / "resolvers.py", "def id(book, info):\n    return 1\n")

    tree = load_tree(tmp_path, extensions=["gql"])

    assert tree == {"Book": {"schema": "type Book { id: ID }"}}


def test_file_module_merges_into_directory(tmp_path):
    write(tmp_path / "Book" / "schema.graphql", "type Book { id: ID }")
    write(tmp_path / "Book.py", "resolvers = {'id': lambda book, info: 1}\n")

    tree = load_tree(tmp_path)

    assert set(tree["Book"]) == {"schema", "resolvers"}


def test_repeated_loads_get_fresh_modules(tmp_path):
    write(tmp_path / "Book" / "loaders.py", "cache = {}\nloaders = {'books': lambda context: cache}\n")

    first = load_tree(tmp_path)["Book"]["loaders"]["books"]
    second = load_tree(tmp_path)["Book"]["loaders"]["books"]

    assert first is not second
    assert first(None) is not second(None)


def test_missing_root(tmp_path):
    with pytest.raises(ConfigurationError):
        load_tree(tmp_path / "missing")


def test_broken_module_names_the_file(tmp_path):
    write(tmp_path / "Book" / "resolvers.py", "raise RuntimeError('broken')\n")

    with pytest.raises(ConfigurationError, match="resolvers.py"):
        load_tree(tmp_path)


def test_loaded_modules_are_not_left_in_sys_modules(tmp_path):
    write(tmp_path / "Book" / "resolvers.py", "def title(book, info):\n    return book['title']\n")
    before = set(sys.modules)

    load_tree(tmp_path)
    load_tree(tmp_path)

    assert set(sys.modules) == before
