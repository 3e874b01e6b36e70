# treecopy/file_node.py
from dataclasses import dataclass, field
from typing import List

from treecopy.tree_constants import FILE_TYPE, DIRECTORY_TYPE, NODE_TYPES


@dataclass
class FileNode:
    """
    One entry of the workspace tree.

    `path` is relative to the workspace root and always uses '/'.
    `checked`, `partially_checked` and `expanded` belong to the selection UI:
    they are initialized here and carried through, never computed.
    """
    name: str
    path: str
    type: str
    checked: bool = False
    partially_checked: bool = False
    expanded: bool = False
    children: List["FileNode"] = field(default_factory=list)

    @property
    def is_file(self):
        return self.type == FILE_TYPE

    @property
    def is_dir(self):
        return self.type == DIRECTORY_TYPE

    def to_dict(self):
        """Wire form exchanged with the panel (camelCase keys)."""
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "checked": self.checked,
            "partiallyChecked": self.partially_checked,
            "expanded": self.expanded,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data):
        node_type = data.get("type")
        if node_type not in NODE_TYPES:
            raise ValueError(f"Unknown node type {node_type!r} for {data.get('path')!r}")
        return cls(
            name=data["name"],
            path=data["path"],
            type=node_type,
            checked=bool(data.get("checked", False)),
            partially_checked=bool(data.get("partiallyChecked", False)),
            expanded=bool(data.get("expanded", False)),
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )


def iter_nodes(nodes):
    """Depth-first walk in tree order."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def collect_checked_paths(nodes):
    return [node.path for node in iter_nodes(nodes) if node.is_file and node.checked]
