"""
Upload Workflow

validate -> resolve uploader -> quota gate -> blob store -> credit ->
note record -> uploader totals -> channel attachment

Nothing is written to the database before the blob store call succeeds,
and every input the note record would reject is refused before that call.
The database writes after it are independent; a failure between them can
leave an orphaned blob, which is not cleaned up.
"""
import base64
import logging
import math
import re
import time
from dataclasses import dataclass
from typing import Optional

from tortoise.transactions import in_transaction

from notehub.config import settings
from notehub.core.errors import FileTooLarge, InvalidInput, MissingFile, QuotaExceeded, StorageError
from notehub.core.quota import QuotaGate
from notehub.models.note import NO_CHANNEL, Note
from notehub.models.user import User
from notehub.services.account_service import get_user_by_email
from notehub.services.blob_base import BlobQuotaExceeded, BlobStore, BlobStoreError
from notehub.services.channel_service import attach_note, parse_id
from notehub.services.note_service import file_type_from_name

logger = logging.getLogger("uvicorn.error")

CREDITS_BY_TYPE = {"pdf": 3, "ppt": 2, "image": 1}

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")

# Client field name -> Note column whose max_length bounds it
_BOUNDED_FIELDS = {
    "fileName": "file_name",
    "regulation": "regulation",
    "year": "year",
    "topic": "topic",
    "subject": "subject",
    "subjectCode": "subject_code",
}


@dataclass
class NoteFields:
    """Descriptive fields supplied with an upload."""
    uploaded_by: str
    regulation: Optional[str] = None
    year: Optional[str] = None
    topic: Optional[str] = None
    subject: Optional[str] = None
    subject_code: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[str] = None


@dataclass
class UploadResult:
    note_id: str
    file_url: str
    credits_earned: int
    credits: int
    upload_count: int
    channel_attached: bool


def sanitize_file_name(file_name: str) -> str:
    """Replace every character outside [A-Za-z0-9.-] with "_"."""
    return _UNSAFE_CHARS.sub("_", file_name)


def build_storage_path(file_name: str, now_ms: Optional[int] = None) -> str:
    """Blob key: notes/{epoch-millis}-{sanitized name}"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"notes/{now_ms}-{sanitize_file_name(file_name)}"


def credits_for(file_type: str) -> int:
    return CREDITS_BY_TYPE.get(file_type, 0)


def channel_value(raw: Optional[str]) -> str:
    """
    Channel column value for an upload.

    Anything that cannot be a channel id (empty, "none", not a UUID) is
    stored as "none"; a well-formed id is kept even if no channel has it.
    """
    cid = parse_id(raw)
    return str(cid) if cid is not None else NO_CHANNEL


def check_field_lengths(file_name: str, fields: NoteFields) -> None:
    """Raise InvalidInput when a value would not fit its Note column."""
    values = {
        "fileName": file_name,
        "regulation": fields.regulation,
        "year": fields.year,
        "topic": fields.topic,
        "subject": fields.subject,
        "subjectCode": fields.subject_code,
    }
    for label, value in values.items():
        limit = Note._meta.fields_map[_BOUNDED_FIELDS[label]].max_length
        if value is not None and len(value) > limit:
            raise InvalidInput(f"{label} must be at most {limit} characters")


def _check_gate(gate: QuotaGate) -> None:
    remaining = gate.remaining_seconds()
    if remaining <= 0:
        return
    raise QuotaExceeded(
        f"GitHub rate limit exceeded. Try again in {math.ceil(remaining / 60)} minutes.",
        retry_after_seconds=math.ceil(remaining),
    )


async def _credit_uploader(user_id, note_id: str, credits_earned: int) -> User:
    """Apply the upload to the uploader's totals against the current row."""
    async with in_transaction() as conn:
        u = await User.select_for_update().using_db(conn).get(id=user_id)
        u.credits += credits_earned
        u.upload_count += 1
        u.uploaded_notes = [*u.uploaded_notes, note_id]
        await u.save(using_db=conn, update_fields=["credits", "upload_count", "uploaded_notes"])
    return u


async def upload_note(
    file_name: Optional[str],
    content: Optional[bytes],
    fields: NoteFields,
    store: BlobStore,
    gate: QuotaGate,
) -> UploadResult:
    """
    Run the whole upload pipeline for one file.

    Raises:
        MissingFile: No file (or an empty file name) was supplied
        FileTooLarge: Content exceeds settings.max_upload_bytes
        InvalidInput: A descriptive field is longer than its column allows
        UserNotFound: ``uploaded_by`` is not a registered email
        QuotaExceeded: The gate is closed, or the store just reported quota exhaustion
        StorageError: Any other blob store failure
    """
    # 1) Validate
    if content is None or not file_name:
        raise MissingFile()
    if len(content) > settings.max_upload_bytes:
        raise FileTooLarge()
    check_field_lengths(file_name, fields)
    channel = channel_value(fields.channel)

    # Resolve the uploader before touching the blob store
    user = await get_user_by_email(fields.uploaded_by)

    # 2) Rate gate
    _check_gate(gate)

    # 3) Store
    file_path = build_storage_path(file_name)
    content_b64 = base64.b64encode(content).decode("ascii")
    logger.info("[upload] %s (%d bytes) -> %s", file_name, len(content), file_path)
    try:
        file_url = await store.put(file_path, content_b64, f"Upload note: {fields.topic or file_name}")
    except BlobQuotaExceeded as e:
        gate.trip(settings.quota_cooldown_seconds)
        logger.warning("[upload] blob store quota exhausted, uploads paused for %ss: %s",
                       settings.quota_cooldown_seconds, e)
        raise QuotaExceeded(retry_after_seconds=settings.quota_cooldown_seconds) from e
    except BlobStoreError as e:
        logger.error("[upload] blob store failure: %s", e)
        raise StorageError() from e

    # 4) Classify & credit
    credits_earned = credits_for(file_type_from_name(file_name))

    # 5) Persist metadata
    note = await Note.create(
        file_name=file_name,
        file_url=file_url,
        file_path=file_path,
        regulation=fields.regulation,
        year=fields.year,
        topic=fields.topic,
        subject=fields.subject,
        subject_code=fields.subject_code,
        description=fields.description,
        channel=channel,
        uploaded_by=fields.uploaded_by,
    )
    note_id = str(note.id)

    # 6) Update uploader
    user = await _credit_uploader(user.id, note_id, credits_earned)

    # 7) Attach to channel
    attached = False
    if channel != NO_CHANNEL:
        attached = await attach_note(channel, note_id)
        if not attached:
            logger.info("[upload] channel %s not found, note %s kept in library only", channel, note_id)

    return UploadResult(
        note_id=note_id,
        file_url=file_url,
        credits_earned=credits_earned,
        credits=user.credits,
        upload_count=user.upload_count,
        channel_attached=attached,
    )
