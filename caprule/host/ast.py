# caprule/host/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# ---- Output tree node definitions ----

@dataclass(frozen=True)
class Location:
    line: int    # 1-based
    column: int  # 1-based
    offset: int  # absolute index into the input

@dataclass(frozen=True)
class Span:
    start: Location
    end: Location

@dataclass
class Node:
    type: str
    val: str = ""
    position: Optional[Span] = None
    nodes: List["Node"] = field(default_factory=list)
    # back-reference and annotations stay out of repr/eq (cycles, match objects)
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)
    meta: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def define(self, key: str, value: Any) -> "Node":
        """Attach read-only metadata (e.g. the raw `match`) to the node."""
        self.meta[key] = value
        return self

    def add_node(self, node: "Node") -> "Node":
        node.parent = self
        self.nodes.append(node)
        return node

    @property
    def match(self):
        return self.meta.get("match")

    @property
    def first(self) -> Optional["Node"]:
        return self.nodes[0] if self.nodes else None
