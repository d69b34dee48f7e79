"""Pydantic schemas for the answers API."""
from typing import Any, Optional
from datetime import datetime

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnswerRecord(BaseModel):
    """A stored answer with its optional attached file.

    No field is required at the storage layer. A record without a file has
    fileName, filePath and mimeType all None.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Store-assigned identifier")
    title: Optional[str] = Field(None, description="Answer title")
    fileName: Optional[str] = Field(None, description="Generated name of the stored file")
    filePath: Optional[str] = Field(None, description="Location of the file in ephemeral storage")
    question: Optional[str] = Field(None, description="Question text")
    uploadDate: Optional[str] = Field(None, description="Caller-supplied upload date")
    gsPaper: Optional[str] = Field(None, description="GS paper tag")
    source: Optional[str] = Field(None, description="Source of the question")
    mimeType: Optional[str] = Field(None, description="Content type of the stored file")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @classmethod
    def from_document(cls, document: dict) -> "AnswerRecord":
        """Build a record from a raw store document."""
        return cls.model_validate(document)


class MessageResponse(BaseModel):
    """Plain confirmation or not-found body."""
    message: str


class ErrorResponse(BaseModel):
    """Error body: context message plus the underlying error text."""
    message: str
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(default="healthy")
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
