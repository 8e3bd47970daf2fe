"""
Note Library

Listing and searching the global note library, plus the file type
classification shared with the upload workflow.
"""
from typing import Optional

from tortoise.expressions import Q

from notehub.models.note import Note

# Extension -> file type; anything else is treated as a pdf
_FILE_TYPES = {
    ".pdf": "pdf",
    ".ppt": "ppt",
    ".pptx": "ppt",
    ".jpg": "image",
    ".jpeg": "image",
    ".png": "image",
}


def file_type_from_name(file_name: Optional[str]) -> str:
    """Classify a file as "pdf", "ppt" or "image" from its extension."""
    if not file_name:
        return "pdf"
    name = file_name.lower()
    for ext, file_type in _FILE_TYPES.items():
        if name.endswith(ext):
            return file_type
    return "pdf"


def note_summary(n: Note) -> dict:
    """Library entry; the id goes out as ``_id``, the key clients bookmark by."""
    return {
        "_id": str(n.id),
        "fileName": n.file_name,
        "fileUrl": n.file_url,
        "regulation": n.regulation,
        "year": n.year,
        "topic": n.topic,
        "subject": n.subject,
        "subjectCode": n.subject_code,
        "description": n.description,
        "channel": n.channel,
        "uploadedBy": n.uploaded_by,
        "uploadedAt": n.uploaded_at.isoformat() if n.uploaded_at else None,
        "fileType": file_type_from_name(n.file_name),
    }


def note_card(n: Note) -> dict:
    """Compact form used inside channel details."""
    return {
        "id": str(n.id),
        "title": n.topic or n.file_name,
        "subject": n.subject,
        "subjectCode": n.subject_code,
        "regulation": n.regulation,
        "year": n.year,
        "description": n.description,
        "fileType": file_type_from_name(n.file_name),
        "uploadedBy": n.uploaded_by,
        "uploadDate": n.uploaded_at.date().isoformat() if n.uploaded_at else None,
        "fileUrl": n.file_url,
    }


async def list_notes(
    q: Optional[str] = None,
    regulation: Optional[str] = None,
    year: Optional[str] = None,
    subject: Optional[str] = None,
) -> list[Note]:
    """
    All notes, newest first.

    Args:
        q: Case-insensitive substring matched against topic, file name,
           subject, subject code and description
        regulation / year / subject: Exact-match filters

    With no arguments every note is returned.
    """
    qs = Note.all()
    if q:
        qs = qs.filter(
            Q(topic__icontains=q)
            | Q(file_name__icontains=q)
            | Q(subject__icontains=q)
            | Q(subject_code__icontains=q)
            | Q(description__icontains=q)
        )
    if regulation:
        qs = qs.filter(regulation=regulation)
    if year:
        qs = qs.filter(year=year)
    if subject:
        qs = qs.filter(subject=subject)
    return await qs.order_by("-uploaded_at")
