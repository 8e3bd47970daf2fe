# notehub/api/routers/notes.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from notehub.api.deps import blob_store_dependency, quota_gate_dependency
from notehub.core.errors import db_errors
from notehub.core.quota import QuotaGate
from notehub.schemas.note import NoteSummary, UploadNoteOut
from notehub.services.blob_base import BlobStore
from notehub.services.note_service import list_notes, note_summary
from notehub.services.upload_service import NoteFields, upload_note

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["notes"])


@router.post("/upload-note", response_model=UploadNoteOut)
async def upload(
    file: Optional[UploadFile] = File(default=None),
    regulation: Optional[str] = Form(default=None),
    year: Optional[str] = Form(default=None),
    topic: Optional[str] = Form(default=None),
    subject: Optional[str] = Form(default=None),
    subjectCode: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    channel: Optional[str] = Form(default=None),
    uploadedBy: str = Form(default=""),
    store: BlobStore = Depends(blob_store_dependency),
    gate: QuotaGate = Depends(quota_gate_dependency),
):
    """
    Upload a note (multipart/form-data).

    The file is committed to the blob store, a note record is created, the
    uploader earns credits (pdf 3, ppt 2, image 1), and the note is added
    to ``channel`` unless it is "none" or unknown.

    Returns:
        dict: message, public fileUrl, creditsEarned and the uploader's new totals

    Error codes:
        - NO_FILE / FILE_TOO_LARGE (400)
        - BAD_REQUEST (400): A descriptive field is too long
        - USER_NOT_FOUND (404): uploadedBy is not registered
        - QUOTA_EXCEEDED (429): Blob store quota exhausted (Retry-After header set)
        - STORAGE_ERROR / PERSISTENCE_ERROR (500)
    """
    content = await file.read() if file is not None else None
    file_name = file.filename if file is not None else None
    logger.info("[upload] request received -> file=%s size=%s",
                file_name, len(content) if content is not None else None)

    fields = NoteFields(
        uploaded_by=uploadedBy,
        regulation=regulation,
        year=year,
        topic=topic,
        subject=subject,
        subject_code=subjectCode,
        description=description,
        channel=channel,
    )
    with db_errors("Failed to upload file."):
        result = await upload_note(file_name, content, fields, store=store, gate=gate)

    return {
        "message": "File uploaded successfully!",
        "fileUrl": result.file_url,
        "creditsEarned": result.credits_earned,
        "user": {"credits": result.credits, "uploadCount": result.upload_count},
    }


@router.get("/get-notes", response_model=List[NoteSummary])
async def get_notes(
    q: Optional[str] = Query(default=None, description="Search topic, file name, subject, code and description"),
    regulation: Optional[str] = Query(default=None),
    year: Optional[str] = Query(default=None),
    subject: Optional[str] = Query(default=None),
):
    """
    The global note library, newest first.

    Without query parameters every note is returned.
    """
    with db_errors("Failed to fetch notes"):
        rows = await list_notes(q=q, regulation=regulation, year=year, subject=subject)
    return [note_summary(n) for n in rows]
