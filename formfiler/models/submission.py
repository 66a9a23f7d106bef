"""Form submission Pydantic models"""
from pydantic import BaseModel, Field
from typing import Optional, List, Union, Literal, Annotated
from datetime import datetime, timezone
from enum import Enum


class ItemKind(str, Enum):
    """Question types the form platform reports"""
    TEXT = "TEXT"
    PARAGRAPH_TEXT = "PARAGRAPH_TEXT"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    CHECKBOX = "CHECKBOX"
    LIST = "LIST"
    SCALE = "SCALE"
    DATE = "DATE"
    TIME = "TIME"
    FILE_UPLOAD = "FILE_UPLOAD"


class TextItemResponse(BaseModel):
    """Single-valued answer"""
    question_title: str
    kind: Literal[
        ItemKind.TEXT,
        ItemKind.PARAGRAPH_TEXT,
        ItemKind.MULTIPLE_CHOICE,
        ItemKind.LIST,
        ItemKind.SCALE,
        ItemKind.DATE,
        ItemKind.TIME,
    ]
    answer: Optional[str] = None

    model_config = {"frozen": True}


class ChoiceItemResponse(BaseModel):
    """Multi-valued answer (checkboxes)"""
    question_title: str
    kind: Literal[ItemKind.CHECKBOX]
    answer: Optional[List[str]] = None

    model_config = {"frozen": True}


class FileUploadItemResponse(BaseModel):
    """Uploaded files, carried as opaque storage file ids"""
    question_title: str
    kind: Literal[ItemKind.FILE_UPLOAD]
    answer: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


ItemResponse = Annotated[
    Union[TextItemResponse, ChoiceItemResponse, FileUploadItemResponse],
    Field(discriminator="kind"),
]


class SubmissionEvent(BaseModel):
    """One form submission as delivered by the form platform webhook"""
    response_id: Optional[str] = None
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    respondent_email: Optional[str] = None
    items: List[ItemResponse] = Field(default_factory=list)

    model_config = {"frozen": True}
