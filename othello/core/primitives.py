from __future__ import annotations
from typing import Dict, Any, List
from pydantic import BaseModel, Field


class Explanation(BaseModel):
    """Detailed reasoning for the UI (why legal, which rays capture, outcomes)."""
    ok: bool
    steps: List[Dict[str, Any]] = Field(default_factory=list)
    outcome: Dict[str, Any] = Field(default_factory=dict)
