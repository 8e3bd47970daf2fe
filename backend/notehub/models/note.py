# notehub/models/note.py
"""
Database model for notes.
Holds the metadata of an uploaded document; the file itself lives only in
the blob store under ``file_path``.
"""
import uuid
from tortoise import fields, models

# Channel value meaning "not shared to any channel"
NO_CHANNEL = "none"


class Note(models.Model):
    """
    Note database model.

    Created exactly once by the upload workflow and never modified.
    ``file_url`` is derived from ``file_path`` when the note is created.
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    file_name = fields.CharField(max_length=512)  # Original name supplied by the client
    file_url = fields.CharField(max_length=1024)  # Public raw-content URL
    file_path = fields.CharField(max_length=1024)  # Blob store key, e.g. notes/1700000000000-x.pdf
    regulation = fields.CharField(max_length=64, null=True)
    year = fields.CharField(max_length=32, null=True)
    topic = fields.CharField(max_length=256, null=True)
    subject = fields.CharField(max_length=256, null=True)
    subject_code = fields.CharField(max_length=64, null=True)
    description = fields.TextField(null=True)
    channel = fields.CharField(max_length=64, default=NO_CHANNEL)  # Channel id or "none"
    uploaded_by = fields.CharField(max_length=256, index=True)  # Uploader email (denormalized)
    uploaded_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "notes"
