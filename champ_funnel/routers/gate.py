"""
Calibration Gate Router - Champ Funnel
champ_funnel/routers/gate.py

Server side of the drag-to-calibrate puzzle in front of the quiz.
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from champ_funnel.gate.calibration import CalibrationGate
from champ_funnel.gate.store import GateSessionStore, get_gate_store
from champ_funnel.models.enumerations import GateState, GateVertex

router = APIRouter(prefix="/api/v1/gate", tags=["Calibration Gate"])


#  Schemas


class PlacementRequest(BaseModel):
    node: Literal["builder", "translator", "architect"]
    x: float = Field(..., description="Drop position, percent of width")
    y: float = Field(..., description="Drop position, percent of height")


class GateNodeResponse(BaseModel):
    id: str
    target: GateVertex
    x: float
    y: float
    placed: bool


class GateSessionResponse(BaseModel):
    id: UUID
    state: GateState
    placed_count: int
    nodes: List[GateNodeResponse]
    created_at: datetime
    unlocked_at: Optional[datetime] = None
    snapped: Optional[bool] = Field(
        default=None,
        description="Whether the last placement snapped; only set on placement responses",
    )


def gate_to_response(gate: CalibrationGate, snapped: Optional[bool] = None) -> GateSessionResponse:
    return GateSessionResponse(
        id=gate.id,
        state=gate.state,
        placed_count=gate.placed_count,
        nodes=[
            GateNodeResponse(id=n.id, target=n.target, x=n.x, y=n.y, placed=n.placed)
            for n in gate.nodes.values()
        ],
        created_at=gate.created_at,
        unlocked_at=gate.unlocked_at,
        snapped=snapped,
    )


#  Routes


@router.post(
    "/sessions",
    response_model=GateSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start calibration",
)
async def create_gate_session(
    gate_store: GateSessionStore = Depends(get_gate_store),
) -> GateSessionResponse:
    return gate_to_response(gate_store.create())


@router.get(
    "/sessions/{session_id}",
    response_model=GateSessionResponse,
    summary="Get calibration state",
    responses={404: {"description": "Unknown session"}},
)
async def get_gate_session(
    session_id: UUID,
    gate_store: GateSessionStore = Depends(get_gate_store),
) -> GateSessionResponse:
    return gate_to_response(gate_store.get(session_id))


@router.post(
    "/sessions/{session_id}/placements",
    response_model=GateSessionResponse,
    summary="Drop a node",
    description="Snaps the node onto its vertex when dropped within the snap radius.",
    responses={404: {"description": "Unknown session"}},
)
async def place_gate_node(
    session_id: UUID,
    placement: PlacementRequest,
    gate_store: GateSessionStore = Depends(get_gate_store),
) -> GateSessionResponse:
    gate, snapped = gate_store.place(session_id, placement.node, placement.x, placement.y)
    return gate_to_response(gate, snapped)
