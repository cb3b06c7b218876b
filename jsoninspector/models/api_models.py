"""
Pydantic models for API request/response serialization.
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Any


class InspectRequest(BaseModel):
    json_text: str = Field(default="", alias="json", description="JSON payload to inspect, possibly escaped")

    class Config:
        populate_by_name = True


class InspectResponse(BaseModel):
    entities: List[Dict[str, Any]]
    definitions: List[Dict[str, Any]] = Field(default_factory=list, description="Element definitions referenced by instances")
    warnings: List[str]
    entity_count: int
    warning_count: int
    summary: Dict[str, Any] = Field(default_factory=dict)
