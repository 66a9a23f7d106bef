"""Filing result Pydantic models"""
from pydantic import BaseModel, Field
from typing import Optional, List, Union, Literal, Annotated
from enum import Enum


class Moved(BaseModel):
    """A file that was renamed and moved into the submission folder"""
    status: Literal["moved"] = "moved"
    file_id: str
    original_name: str
    final_name: str


class Failed(BaseModel):
    """A file that could not be filed; the rest of the run carried on"""
    status: Literal["failed"] = "failed"
    file_id: str
    question_title: str
    reason: str


RouteOutcome = Annotated[Union[Moved, Failed], Field(discriminator="status")]


class RunStatus(str, Enum):
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"  # completed, but one or more files failed
    FATAL = "fatal"


class OrchestratorResult(BaseModel):
    """Overall outcome of processing one submission"""
    status: RunStatus
    timestamp: str
    folder_name: Optional[str] = None
    container_id: Optional[str] = None
    outcomes: List[RouteOutcome] = Field(default_factory=list)
    error: Optional[str] = None
    admin_notified: bool = False

    @property
    def failed_files(self) -> List[Failed]:
        return [o for o in self.outcomes if isinstance(o, Failed)]
