"""
Static equilibrium of planar trusses by the method of joints.

The solver assumes a statically determinate, symmetric truss on two supports
carrying vertical loads only. Under that assumption each support reaction is
half of the total load, and member forces follow from joint equilibrium:
joints with two unknown members are solved as a 2x2 system, and solving one
joint makes its neighbours solvable. The scan repeats until every force is
known or a full pass makes no progress.

Sign convention: a member force acts on a joint along the unit vector from
that joint towards the member's far end, so positive forces pull on the
joint (tension) and negative forces push (compression).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from truss_sizer.core.base import Truss
from truss_sizer.trusses.w_truss.truss import upper_chord_nodes
from truss_sizer.utils.units import mm_to_meters

# Node handle -> downward vertical force (kN)
JointLoads = Dict[int, float]

SINGULAR_TOLERANCE = 1e-9
# Per kN of total load (never below 1 kN): smaller forces are round-off on
# zero-force members
ZERO_FORCE_TOLERANCE = 1e-9
# Per kN of total load (never below 1 kN): larger joint residuals mean the
# fixed reactions do not balance the loads
BALANCE_TOLERANCE = 1e-6


def solve_2x2(
    a1: float, b1: float, c1: float,
    a2: float, b2: float, c2: float,
    tolerance: float = SINGULAR_TOLERANCE,
) -> Optional[Tuple[float, float]]:
    """
    Solve a1·x + b1·y = c1, a2·x + b2·y = c2 by Cramer's rule.

    Returns:
        (x, y), or None when |det| < tolerance (parallel or collinear rows)
    """
    det = a1 * b2 - a2 * b1
    if abs(det) < tolerance:
        return None
    x = (c1 * b2 - c2 * b1) / det
    y = (a1 * c2 - a2 * c1) / det
    return x, y


def member_direction(truss: Truss, node: int, member_index: int) -> np.ndarray:
    """Unit vector from `node` towards the far end of a member."""
    member = truss.members[member_index]
    here = truss.nodes[node]
    there = truss.nodes[member.other_end(node)]
    angle = np.arctan2(there.y - here.y, there.x - here.x)
    return np.array([np.cos(angle), np.sin(angle)])


def distribute_load(truss: Truss, line_load: float) -> JointLoads:
    """
    Lump a uniform roof load onto the interior upper chord joints.

    The total load line_load × span is shared equally between the upper
    chord nodes that are not supports.

    Args:
        truss: Truss with an upper chord
        line_load: Load per meter of span (kN/m), downward positive

    Returns:
        Joint loads (kN) keyed by node handle
    """
    nodes = upper_chord_nodes(truss)
    if not nodes:
        raise ValueError("Truss has no interior upper chord nodes to load")
    total = line_load * mm_to_meters(truss.span)
    share = total / len(nodes)
    return {node: share for node in nodes}


def support_reactions(truss: Truss, joint_loads: JointLoads) -> Dict[int, float]:
    """
    Upward support reactions (kN) for a symmetric truss and load.

    Each support takes exactly half of the total applied load; asymmetric
    trusses or loads would need a moment equation instead.
    """
    total = sum(joint_loads.values())
    left, right = truss.supports
    return {left: total / 2, right: total / 2}


@dataclass(frozen=True)
class TrussSolution:
    """
    Outcome of a joint-elimination solve.

    Attributes:
        truss: Truss whose members carry the solved forces (kN). Members the
            solver could not reach carry 0.0.
        joint_loads: Applied downward loads (kN) by node handle
        reactions: Upward support reactions (kN) by node handle
        unresolved_members: Indices of members whose force was never found
        deferred_nodes: Nodes that produced a singular system at least once
        inconsistent_nodes: Solved joints left out of balance, which happens
            when the loads are not symmetric and the half-and-half reactions
            are wrong. Forces around them cannot be trusted.
        passes: Number of scans over the node list
    """
    truss: Truss
    joint_loads: Dict[int, float]
    reactions: Dict[int, float]
    unresolved_members: FrozenSet[int] = field(default_factory=frozenset)
    deferred_nodes: FrozenSet[int] = field(default_factory=frozenset)
    inconsistent_nodes: FrozenSet[int] = field(default_factory=frozenset)
    passes: int = 0

    @property
    def is_complete(self) -> bool:
        """True when every member force was found and every joint balances."""
        return not self.unresolved_members and not self.inconsistent_nodes

    @property
    def forces(self) -> Tuple[float, ...]:
        return tuple(m.force for m in self.truss.members)

    @property
    def total_load(self) -> float:
        return sum(self.joint_loads.values())


def _external_force(
    node: int,
    joint_loads: JointLoads,
    reactions: Dict[int, float],
) -> np.ndarray:
    fy = reactions.get(node, 0.0) - joint_loads.get(node, 0.0)
    return np.array([0.0, fy])


def solve(
    truss: Truss,
    joint_loads: JointLoads,
    tolerance: float = SINGULAR_TOLERANCE,
    verbose: bool = False,
) -> TrussSolution:
    """
    Solve every member's axial force by iterative joint elimination.

    A node is solvable when exactly two incident members are unknown: the
    horizontal and vertical equilibrium equations give a 2x2 system. If the
    two members are collinear the system is singular and the node is retried
    on a later pass. A node left with a single unknown member is closed with
    the equilibrium equation along that member's dominant axis.

    Nothing is raised for a topology the scan cannot finish. The loop stops
    after a pass without progress and the remaining members are reported
    with zero force and listed in `unresolved_members`. Finally every joint
    is checked for balance: when the loads are not symmetric the
    half-and-half reactions are wrong, and the joints left out of balance are
    listed in `inconsistent_nodes`.

    Args:
        truss: Unsolved truss
        joint_loads: Downward vertical loads (kN) by node handle
        tolerance: Determinant magnitude below which a joint is singular
        verbose: Print one line per solved joint

    Returns:
        TrussSolution with the solved truss and diagnostics

    Example:
        >>> from truss_sizer.trusses import build_truss
        >>> truss = build_truss(6000, 900)
        >>> solution = solve(truss, distribute_load(truss, 8.3))
        >>> solution.is_complete
        True
    """
    for node in joint_loads:
        if not 0 <= node < len(truss.nodes):
            raise ValueError(f"Load applied to unknown node {node}")

    reactions = support_reactions(truss, joint_loads)
    incidence = truss.incidence()
    forces: List[Optional[float]] = [None] * len(truss.members)
    processed = [False] * len(truss.nodes)
    deferred = set()
    passes = 0

    while any(f is None for f in forces):
        passes += 1
        progress = False

        for node in range(len(truss.nodes)):
            if processed[node]:
                continue

            unknown = [i for i in incidence[node] if forces[i] is None]
            if not unknown:
                processed[node] = True
                continue
            if len(unknown) > 2:
                continue

            total = _external_force(node, joint_loads, reactions)
            for i in incidence[node]:
                if forces[i] is not None:
                    total = total + forces[i] * member_direction(truss, node, i)

            if len(unknown) == 2:
                m1, m2 = unknown
                d1 = member_direction(truss, node, m1)
                d2 = member_direction(truss, node, m2)
                solution = solve_2x2(
                    d1[0], d2[0], -total[0],
                    d1[1], d2[1], -total[1],
                    tolerance=tolerance,
                )
                if solution is None:
                    deferred.add(node)
                    continue
                forces[m1], forces[m2] = solution
                solved = [m1, m2]
            else:
                (m1,) = unknown
                d1 = member_direction(truss, node, m1)
                axis = 0 if abs(d1[0]) >= abs(d1[1]) else 1
                forces[m1] = -total[axis] / d1[axis]
                solved = [m1]

            processed[node] = True
            progress = True
            if verbose:
                names = ", ".join(
                    f"{truss.members[i].name} = {forces[i]:.3f} kN" for i in solved
                )
                print(f"Pass {passes}: node {node}: {names}")

        if not progress:
            break

    unresolved = frozenset(i for i, f in enumerate(forces) if f is None)
    if verbose and unresolved:
        print(f"Solver stopped after {passes} passes with "
              f"{len(unresolved)} unresolved members")

    scale = max(1.0, abs(sum(joint_loads.values())))
    final = [
        0.0 if f is None or abs(f) < ZERO_FORCE_TOLERANCE * scale else float(f)
        for f in forces
    ]
    solution = TrussSolution(
        truss=truss.with_forces(final),
        joint_loads=dict(joint_loads),
        reactions=reactions,
        unresolved_members=unresolved,
        deferred_nodes=frozenset(deferred),
        passes=passes,
    )

    # Joints next to unresolved members are already reported through them
    blocked = {
        node
        for i in unresolved
        for node in (truss.members[i].start, truss.members[i].end)
    }
    imbalance = np.max(np.abs(joint_residuals(solution)), axis=1)
    inconsistent = frozenset(
        node for node in range(len(truss.nodes))
        if node not in blocked and imbalance[node] > BALANCE_TOLERANCE * scale
    )
    if not inconsistent:
        return solution

    if verbose:
        print(f"Joints out of balance after solving: {sorted(inconsistent)}")
    return replace(solution, inconsistent_nodes=inconsistent)


def joint_residuals(solution: TrussSolution) -> np.ndarray:
    """
    Net force left over at each joint (kN).

    Returns:
        Array of shape (n_nodes, 2) holding ΣFx and ΣFy per node, including
        loads, reactions and member forces. Zero for a balanced truss.
    """
    truss = solution.truss
    residuals = np.zeros((len(truss.nodes), 2))
    for node in range(len(truss.nodes)):
        residuals[node] = _external_force(node, solution.joint_loads, solution.reactions)
    for index, member in enumerate(truss.members):
        for node in (member.start, member.end):
            residuals[node] += member.force * member_direction(truss, node, index)
    return residuals


def max_residual(solution: TrussSolution) -> float:
    """Largest absolute force component left unbalanced at any joint (kN)."""
    return float(np.max(np.abs(joint_residuals(solution))))
