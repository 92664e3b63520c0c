"""
Calibration Gate
champ_funnel/gate/calibration.py

Navigation guard in front of the quiz. The applicant drags the three
archetype nodes onto the corners of a triangle:

    architect  → top          (50, 10)
    builder    → bottomLeft   (20, 85)
    translator → bottomRight  (80, 85)

Coordinates are percentages of the play area. A drop within SNAP_RADIUS of
the node's own vertex snaps the node there; any other drop leaves it where it
was. State machine:

    Locked ──first placement──▶ Calibrating ──all three placed──▶ Unlocked

Unlocked is terminal.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Tuple
from uuid import UUID, uuid4

import structlog

from champ_funnel.models.enumerations import GateState, GateVertex

logger = structlog.get_logger(__name__)

SNAP_RADIUS = 12.0

VERTICES: Dict[GateVertex, Tuple[float, float]] = {
    GateVertex.TOP: (50.0, 10.0),
    GateVertex.BOTTOM_LEFT: (20.0, 85.0),
    GateVertex.BOTTOM_RIGHT: (80.0, 85.0),
}

TARGET_VERTEX: Dict[str, GateVertex] = {
    "builder": GateVertex.BOTTOM_LEFT,
    "translator": GateVertex.BOTTOM_RIGHT,
    "architect": GateVertex.TOP,
}


@dataclass
class GateNode:
    id: str
    target: GateVertex
    x: float
    y: float
    placed: bool = False


def _start_positions() -> Dict[str, GateNode]:
    # Nodes start outside the triangle frame
    return {
        "builder": GateNode("builder", TARGET_VERTEX["builder"], 5.0, 50.0),
        "translator": GateNode("translator", TARGET_VERTEX["translator"], 95.0, 50.0),
        "architect": GateNode("architect", TARGET_VERTEX["architect"], 50.0, 2.0),
    }


@dataclass
class CalibrationGate:
    """One applicant's gate. Not thread-safe; GateSessionStore serializes access."""

    id: UUID = field(default_factory=uuid4)
    snap_radius: float = SNAP_RADIUS
    state: GateState = GateState.LOCKED
    nodes: Dict[str, GateNode] = field(default_factory=_start_positions)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    unlocked_at: datetime | None = None

    @property
    def placed_count(self) -> int:
        return sum(1 for node in self.nodes.values() if node.placed)

    @property
    def is_unlocked(self) -> bool:
        return self.state == GateState.UNLOCKED

    def place(self, node_id: str, x: float, y: float) -> bool:
        """
        Drop a node at (x, y).

        Args:
            node_id: "builder", "translator" or "architect".
            x, y: Drop position in percent; clamped to [5, 95].

        Returns:
            True if the node snapped onto its vertex.

        Raises:
            KeyError: unknown node id.
        """
        node = self.nodes[node_id]
        if self.is_unlocked:
            return node.placed

        x = max(5.0, min(95.0, x))
        y = max(5.0, min(95.0, y))
        vx, vy = VERTICES[node.target]

        if math.hypot(vx - x, vy - y) <= self.snap_radius:
            node.x, node.y, node.placed = vx, vy, True
            snapped = True
        else:
            snapped = False

        if self.state == GateState.LOCKED:
            self.state = GateState.CALIBRATING
        if self.placed_count == len(self.nodes):
            self.state = GateState.UNLOCKED
            self.unlocked_at = datetime.now(timezone.utc)
            logger.info("gate_unlocked", session_id=str(self.id))

        return snapped
