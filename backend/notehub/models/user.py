# notehub/models/user.py
"""
Database model for users.
Represents an account, its stored credentials, and its gamification state.
"""
import uuid
from tortoise import fields, models


class User(models.Model):
    """
    User database model.

    Cross-references to notes and channels are stored as ordered lists of id
    strings, not foreign keys; nothing enforces that the referenced rows
    still exist.

    Security:
    - password and security_pass hold argon2 hashes, never plain text
    - Email is the identity key; uniqueness is checked at signup, not by a
      database constraint
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)  # Primary key: unique user identifier
    username = fields.CharField(max_length=256)  # Display name
    email = fields.CharField(max_length=256, index=True)  # Identity key (indexed for lookups)
    password = fields.CharField(max_length=255)  # Hashed login password
    security_pass = fields.CharField(max_length=255)  # Hashed recovery secret, set once at signup
    verified = fields.BooleanField(default=True)  # No verification flow exists, always true
    credits = fields.IntField(default=0)  # Earned per upload, weighted by file type
    upload_count = fields.IntField(default=0)
    uploaded_notes = fields.JSONField(default=list)  # Ordered Note ids (str)
    joined_channels = fields.JSONField(default=list)  # Channel ids (str)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
