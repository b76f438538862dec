from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Annotated, List, Literal, Optional, Union


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="The content to evaluate. May be empty.")


class AnalysisVerdict(BaseModel):
    """Outcome of classifying a single piece of text."""
    model_config = ConfigDict(frozen=True)

    is_misinformation: bool = Field(..., description="Whether the text constitutes misinformation.")
    reason: str = Field(..., description="Short human-readable rationale for the verdict.")


class SourceList(BaseModel):
    sources: List[str] = Field(
        default_factory=list,
        description="Alternative source URLs, all from the trusted organization.",
    )


class AnalysisRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    verdict: AnalysisVerdict
    sources: List[str] = Field(default_factory=list, description="Alternative source URLs in retrieval order.")


class ErrorInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["classification", "retrieval"]
    message: str


# === Workflow state ===
class _WorkflowStateBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def is_loading(self) -> bool:
        return self.status == "analyzing"

    @property
    def result(self) -> Optional[AnalysisRecord]:
        return None


class Idle(_WorkflowStateBase):
    status: Literal["idle"] = "idle"


class Analyzing(_WorkflowStateBase):
    status: Literal["analyzing"] = "analyzing"
    attempt_id: int


class Completed(_WorkflowStateBase):
    status: Literal["completed"] = "completed"
    attempt_id: int
    record: AnalysisRecord

    @property
    def result(self) -> Optional[AnalysisRecord]:
        return self.record


class Failed(_WorkflowStateBase):
    status: Literal["failed"] = "failed"
    attempt_id: int
    error: ErrorInfo


WorkflowState = Annotated[
    Union[Idle, Analyzing, Completed, Failed],
    Field(discriminator="status"),
]


# === API schemas ===
class AnalysisResponse(BaseModel):
    status: str = Field(..., description="idle | analyzing | completed | failed")
    is_loading: bool = False
    attempt_id: Optional[int] = None
    is_misinformation: Optional[bool] = None
    reason: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    error: Optional[ErrorInfo] = None
