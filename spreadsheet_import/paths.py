"""
Dot-path helpers for nested attribute trees.

Field ids such as ``profile.email`` address nested attributes. Rows are
collected as flat ``{dot_path: value}`` mappings, expanded into a nested tree
before validation, and looked up by path afterwards.
"""

from typing import Any

from django.utils.translation import gettext as _

from .constants import ERROR_PATH_CONFLICT
from .exceptions import ConfigurationError

SEPARATOR = "."

_MISSING = object()


def dot(tree: dict, prefix: str = "") -> dict:
    """
    Flatten a nested mapping into dot-path keys.

    Empty nested mappings are kept as values so that nothing is lost.

    Example:
        >>> dot({"name": 0, "profile": {"email": 1}})
        {'name': 0, 'profile.email': 1}
    """
    flat = {}
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            flat.update(dot(value, prefix=f"{path}{SEPARATOR}"))
        else:
            flat[path] = value
    return flat


def undot(flat: dict) -> dict:
    """
    Expand dot-path keys into a nested tree.

    Raises:
        ConfigurationError: If one path is a prefix of another path holding a scalar
    """
    tree: dict = {}
    for path, value in flat.items():
        parts = str(path).split(SEPARATOR)
        node = tree
        for depth, part in enumerate(parts[:-1]):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                prefix = SEPARATOR.join(parts[: depth + 1])
                raise ConfigurationError(_(ERROR_PATH_CONFLICT).format(path=path, prefix=prefix))
            node = child
        node[parts[-1]] = value
    return tree


def get_path(tree: dict, path: str, default: Any = None) -> Any:
    """Resolve a dot-path inside a nested tree, returning ``default`` when any segment is missing."""
    node: Any = tree
    for part in path.split(SEPARATOR):
        if not isinstance(node, dict):
            return default
        node = node.get(part, _MISSING)
        if node is _MISSING:
            return default
    return node


def to_lookup(path: str) -> str:
    """Convert a dot-path into a Django ORM lookup (``profile.email`` -> ``profile__email``)."""
    return path.replace(SEPARATOR, "__")
