from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StepType(str, Enum):
    TASK = "task"
    CONDITION = "condition"
    JOIN = "join"
    SAVE_POINT = "save_point"
    HUMAN = "human"
    FORK = "fork"
    PARALLEL = "parallel"

    @classmethod
    def parse(cls, value: object) -> StepType:
        if not value:
            return cls.TASK
        lowered = str(value).strip().lower()
        if lowered == "savepoint":
            return cls.SAVE_POINT
        try:
            return cls(lowered)
        except ValueError:
            return cls.TASK


class Step(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: StepType = Field(default=StepType.TASK)
    label: Optional[str] = None
    next: List[str] = Field(default_factory=list)
    else_: Optional[str] = Field(default=None, alias="else")
    on_failure: Optional[str] = None
    parallel: List[str] = Field(default_factory=list)
    wait_for: List[str] = Field(default_factory=list)

    def display_label(self, name: str) -> str:
        return self.label or name


class FlowDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: Dict[str, Step] = Field(default_factory=dict)
    start: str = ""

    def has_start(self) -> bool:
        return bool(self.start) and self.start in self.steps
