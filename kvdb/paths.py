from __future__ import annotations

from typing import Any, Mapping, Sequence


def split_path(path: str | None) -> list[str]:
    if not path:
        return []
    return path.split(".")


def value_field(path: str) -> str:
    # records keep their payload under "value"
    return f"value.{path}"


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if segment.isdigit() and int(segment) < len(node):
            return node[int(segment)]
        return None
    return None


def walk_path(value: Any, path: str | None) -> Any:
    """
    Resolve a dotted path inside a nested value.

    Returns None as soon as a segment is missing; the remaining segments are
    not visited. A None root, or an empty path, returns the root as-is.
    """
    if value is None:
        return value

    node = value
    for segment in split_path(path):
        node = _step(node, segment)
        if node is None:
            return None
    return node
