"""A tree of groups and reference ids used to organise game data in the editor."""

from __future__ import annotations

import copy
import itertools
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_GROUP_LABEL = "Unnamed Group"

_node_ids = itertools.count()


def _next_node_id() -> str:
    return str(next(_node_ids))


class NodeType(Enum):
    INVALID = "INVALID"
    GROUP = "GROUP"
    ITEM = "ITEM"


@dataclass
class TreeNode:
    """A node of the tree; nodes of a real type get a fresh id."""

    type: NodeType = NodeType.INVALID
    node_id: str | None = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        if self.node_id is None:
            self.node_id = "" if self.type is NodeType.INVALID else _next_node_id()

    def to_json(self) -> dict[str, Any]:
        return {"NodeType": self.type.value, "NodeId": self.node_id}


@dataclass
class ItemNode(TreeNode):
    """A leaf holding the reference id of a game object."""

    ref_id: str = ""
    type: NodeType = field(default=NodeType.ITEM, init=False)

    def to_json(self) -> dict[str, Any]:
        data = super().to_json()
        data["RefId"] = self.ref_id
        return data

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ItemNode:
        return cls(ref_id=data["RefId"], node_id=data["NodeId"])


@dataclass
class GroupNode(TreeNode):
    """A labelled group of child groups and items."""

    label: str = DEFAULT_GROUP_LABEL
    child_groups: list[GroupNode] = field(default_factory=list)
    child_items: list[ItemNode] = field(default_factory=list)
    type: NodeType = field(default=NodeType.GROUP, init=False)

    def add_node(self, node: TreeNode) -> None:
        """Add a copy of a node to the child list that fits its type."""
        if node.type is NodeType.GROUP:
            self.child_groups.append(copy.deepcopy(node))
        elif node.type is NodeType.ITEM:
            self.child_items.append(copy.deepcopy(node))
        else:
            raise ValueError(f"cannot add a node of type {node.type.value}")

    def to_json(self) -> dict[str, Any]:
        data = super().to_json()
        data["Label"] = self.label
        data["Children"] = {
            "Groups": [group.to_json() for group in self.child_groups],
            "Items": [item.to_json() for item in self.child_items],
        }
        return data

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GroupNode:
        children = data["Children"]
        return cls(
            label=data["Label"],
            child_groups=[GroupNode.from_json(g) for g in children["Groups"] or ()],
            child_items=[ItemNode.from_json(i) for i in children["Items"] or ()],
            node_id=data["NodeId"],
        )


@dataclass
class RefIdTree:
    """A tree of reference ids rooted in a group."""

    root: GroupNode = field(default_factory=GroupNode)

    def load(self, path: str | Path) -> None:
        """Replace the tree with the one stored in a JSON file."""
        with open(path, encoding="utf-8") as handle:
            self.root = GroupNode.from_json(json.load(handle))

    def save(self, path: str | Path) -> None:
        """Write the tree to a JSON file, overwriting it."""
        Path(path).write_text(
            json.dumps(self.to_json(), separators=(",", ":"), sort_keys=True),
            encoding="utf-8",
        )

    def to_json(self) -> dict[str, Any]:
        return self.root.to_json()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RefIdTree:
        return cls(root=GroupNode.from_json(data))