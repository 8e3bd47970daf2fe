"""
Pydantic schemas for note library and upload endpoints.
"""
from typing import Optional

from pydantic import BaseModel, Field

__all__ = [
    "NoteSummary",
    "UploadUserTotals",
    "UploadNoteOut",
]


class NoteSummary(BaseModel):
    """Library entry returned by /get-notes."""
    id: str = Field(alias="_id")  # Serialized as "_id"
    fileName: str
    fileUrl: str
    regulation: Optional[str] = None
    year: Optional[str] = None
    topic: Optional[str] = None
    subject: Optional[str] = None
    subjectCode: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[str] = None
    uploadedBy: str
    uploadedAt: Optional[str] = None
    fileType: str  # "pdf", "ppt" or "image"


class UploadUserTotals(BaseModel):
    credits: int
    uploadCount: int


class UploadNoteOut(BaseModel):
    message: str
    fileUrl: str
    creditsEarned: int
    user: UploadUserTotals
