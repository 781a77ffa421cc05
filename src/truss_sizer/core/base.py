"""
Core data model for planar trusses.

Nodes and members live in an explicit arena: `TrussBuilder` hands out stable
integer handles as entities are added, and `build()` freezes everything into
an immutable `Truss`. Members reference nodes only through those handles, so
the node sequence must never be reordered or shortened after construction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Node:
    """
    A truss joint.

    Attributes:
        x: Horizontal coordinate (mm)
        y: Vertical coordinate (mm)
    """
    x: float
    y: float

    def distance_to(self, other: "Node") -> float:
        """Euclidean distance to another node (mm)."""
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Member:
    """
    A two-force (axial only) truss member.

    Attributes:
        start: Handle of the start node
        end: Handle of the end node
        category: Grouping label, e.g. "Upper chord" or "Web diagonal"
        name: Display name, e.g. "Upper chord 3"
        length: Distance between the end nodes (mm)
        force: Axial force (kN), negative = compression, positive = tension.
            None until the truss has been solved.
    """
    start: int
    end: int
    category: str
    name: str
    length: float
    force: Optional[float] = None

    @property
    def is_compression(self) -> bool:
        return self.force is not None and self.force < 0

    @property
    def is_tension(self) -> bool:
        return self.force is not None and self.force > 0

    def other_end(self, node: int) -> int:
        """Handle of the node at the opposite end from `node`."""
        if node == self.start:
            return self.end
        if node == self.end:
            return self.start
        raise ValueError(f"Node {node} is not an end of member {self.name!r}")

    def with_force(self, force: float) -> "Member":
        """Return a copy of this member carrying the given axial force."""
        return replace(self, force=float(force))

    def __repr__(self) -> str:
        force = "unsolved" if self.force is None else f"{self.force:.2f} kN"
        return f"Member({self.name}: {self.start}->{self.end}, {self.length:.0f} mm, {force})"


@dataclass(frozen=True)
class Truss:
    """
    Immutable node/member graph.

    Use `TrussBuilder` to create one; the constructor trusts its arguments.

    Attributes:
        nodes: Ordered nodes; a node's position is its handle
        members: Ordered members
        supports: Handles of the two support nodes (left, right)
    """
    nodes: Tuple[Node, ...]
    members: Tuple[Member, ...]
    supports: Tuple[int, int]

    @property
    def span(self) -> float:
        """Horizontal distance between the supports (mm)."""
        left, right = self.supports
        return abs(self.nodes[right].x - self.nodes[left].x)

    @property
    def is_solved(self) -> bool:
        return all(m.force is not None for m in self.members)

    @property
    def forces(self) -> Tuple[Optional[float], ...]:
        return tuple(m.force for m in self.members)

    def incidence(self) -> List[List[int]]:
        """Member indices meeting at each node, indexed by node handle."""
        incident: List[List[int]] = [[] for _ in self.nodes]
        for index, member in enumerate(self.members):
            incident[member.start].append(index)
            incident[member.end].append(index)
        return incident

    def members_in(self, category: str) -> List[Member]:
        return [m for m in self.members if m.category == category]

    def with_forces(self, forces: Sequence[float]) -> "Truss":
        """Return a new truss whose members carry the given forces."""
        if len(forces) != len(self.members):
            raise ValueError(
                f"Expected {len(self.members)} forces, got {len(forces)}"
            )
        members = tuple(m.with_force(f) for m, f in zip(self.members, forces))
        return replace(self, members=members)


class TrussBuilder:
    """
    Arena that assembles a `Truss`.

    Example:
        >>> builder = TrussBuilder()
        >>> a = builder.add_node(0, 0)
        >>> b = builder.add_node(2000, 0)
        >>> c = builder.add_node(1000, 800)
        >>> builder.add_member(a, b, "Lower chord")
        0
        >>> builder.add_member(a, c, "Upper chord")
        1
        >>> builder.add_member(c, b, "Upper chord")
        2
        >>> builder.mark_support(a)
        >>> builder.mark_support(b)
        >>> truss = builder.build()
    """

    def __init__(self):
        self._nodes: List[Node] = []
        self._members: List[Member] = []
        self._supports: List[int] = []
        self._category_counts: Dict[str, int] = {}

    def add_node(self, x: float, y: float) -> int:
        """Add a node and return its handle."""
        self._nodes.append(Node(float(x), float(y)))
        return len(self._nodes) - 1

    def add_member(
        self,
        start: int,
        end: int,
        category: str,
        name: Optional[str] = None,
    ) -> int:
        """
        Connect two existing nodes and return the member handle.

        Args:
            start: Start node handle
            end: End node handle
            category: Grouping label
            name: Display name; defaults to "<category> <n>" numbered per category
        """
        for handle in (start, end):
            if not 0 <= handle < len(self._nodes):
                raise ValueError(f"Unknown node handle: {handle}")
        if start == end:
            raise ValueError(f"Member cannot start and end at node {start}")

        count = self._category_counts.get(category, 0) + 1
        self._category_counts[category] = count
        if name is None:
            name = f"{category} {count}"

        length = self._nodes[start].distance_to(self._nodes[end])
        self._members.append(Member(start, end, category, name, length))
        return len(self._members) - 1

    def mark_support(self, node: int) -> None:
        if not 0 <= node < len(self._nodes):
            raise ValueError(f"Unknown node handle: {node}")
        if node in self._supports:
            raise ValueError(f"Node {node} is already a support")
        self._supports.append(node)

    def build(self) -> Truss:
        """Freeze the arena into an immutable `Truss`."""
        if len(self._supports) != 2:
            raise ValueError(
                f"A truss needs exactly two supports, got {len(self._supports)}"
            )
        for handle in self._supports:
            if self._nodes[handle].y != 0:
                raise ValueError(f"Support node {handle} is not at y = 0")

        left, right = sorted(self._supports, key=lambda h: self._nodes[h].x)
        return Truss(
            nodes=tuple(self._nodes),
            members=tuple(self._members),
            supports=(left, right),
        )
