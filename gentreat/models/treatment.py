"""
API request/response schemas for protocol evaluation.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class SignInput(BaseModel):
    """One observed sign, e.g. {"kind": "blood_pressure", "value": 40}."""
    kind: str = Field(..., description="Sign kind, e.g. 'pain_score'")
    value: Union[bool, int] = Field(..., description="Integer measurement or boolean flag")


class EvaluationRequest(BaseModel):
    """Evaluate one or more registered protocols for a patient."""
    patient_id: str = "ANONYMOUS"
    protocols: List[str] = Field(..., min_length=1, description="Protocol names, evaluated in order")
    signs: List[SignInput] = Field(default_factory=list)
    current_treatment: List[str] = Field(default_factory=list, description="Active order labels")
    include_trace: bool = False


class TreatmentOut(BaseModel):
    order: str
    target: str


class EvaluationResponse(BaseModel):
    patient_id: str
    treatments: List[TreatmentOut]
    added: List[str]
    removed: List[str]
    trace: Optional[List[str]] = None


class ProtocolStepOut(BaseModel):
    conditions: List[str]
    order: str
    target: str


class ProtocolOut(BaseModel):
    name: str
    steps: List[ProtocolStepOut]


class ProtocolListResponse(BaseModel):
    protocols: List[ProtocolOut]


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    protocols: List[str] = Field(default_factory=list)
