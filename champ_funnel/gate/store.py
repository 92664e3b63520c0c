"""
In-process registry of calibration sessions.

Sessions are short-lived. Once `limit` is reached the least recently used
session is evicted; reading or placing on a session marks it as used.
"""

import threading
from collections import OrderedDict
from functools import lru_cache
from typing import Optional
from uuid import UUID

from champ_funnel.config import get_settings
from champ_funnel.core.exceptions import GateLockedException, GateSessionNotFoundException
from champ_funnel.gate.calibration import CalibrationGate


class GateSessionStore:
    def __init__(self, snap_radius: float, limit: int = 10000):
        self.snap_radius = snap_radius
        self.limit = limit
        self._sessions: "OrderedDict[UUID, CalibrationGate]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> CalibrationGate:
        gate = CalibrationGate(snap_radius=self.snap_radius)
        with self._lock:
            self._sessions[gate.id] = gate
            while len(self._sessions) > self.limit:
                self._sessions.popitem(last=False)
        return gate

    def get(self, session_id: UUID) -> CalibrationGate:
        with self._lock:
            gate = self._sessions.get(session_id)
            if gate is not None:
                self._sessions.move_to_end(session_id)
        if gate is None:
            raise GateSessionNotFoundException(str(session_id))
        return gate

    def place(self, session_id: UUID, node_id: str, x: float, y: float) -> tuple[CalibrationGate, bool]:
        with self._lock:
            gate = self._sessions.get(session_id)
            if gate is None:
                raise GateSessionNotFoundException(str(session_id))
            self._sessions.move_to_end(session_id)
            snapped = gate.place(node_id, x, y)
        return gate, snapped

    def require_unlocked(self, session_id: Optional[UUID]) -> None:
        """Raise GateLockedException unless session_id names an unlocked gate."""
        if session_id is None:
            raise GateLockedException("Calibration required before submitting")
        try:
            gate = self.get(session_id)
        except GateSessionNotFoundException:
            raise GateLockedException("Unknown calibration session") from None
        if not gate.is_unlocked:
            raise GateLockedException()


@lru_cache()
def get_gate_store() -> GateSessionStore:
    """Get cached GateSessionStore instance."""
    settings = get_settings()
    return GateSessionStore(settings.GATE_SNAP_RADIUS, settings.GATE_SESSION_LIMIT)
