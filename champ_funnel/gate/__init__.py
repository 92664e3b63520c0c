"""
gate/ - Calibration gate guarding the quiz

Modules:
    calibration.py  - Locked → Calibrating → Unlocked state machine
    store.py        - Thread-safe in-process session registry
"""

from champ_funnel.gate.calibration import CalibrationGate, SNAP_RADIUS, TARGET_VERTEX, VERTICES
from champ_funnel.gate.store import GateSessionStore, get_gate_store

__all__ = [
    "CalibrationGate",
    "GateSessionStore",
    "SNAP_RADIUS",
    "TARGET_VERTEX",
    "VERTICES",
    "get_gate_store",
]
