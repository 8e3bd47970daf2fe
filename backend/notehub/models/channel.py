# notehub/models/channel.py
"""
Database model for channels.
A channel is a private sharing group joined with a 10-character code.
"""
import uuid
from tortoise import fields, models


class Channel(models.Model):
    """
    Channel database model.

    ``members`` is an ordered list of snapshots taken when each user joined:
        {"userId": str, "username": str, "email": str,
         "isAdmin": bool, "joinedAt": ISO-8601 str}
    Username/email copies are not refreshed if the user changes later.
    ``notes`` is an ordered list of Note ids (str).

    Member and note counts are always computed from the list lengths on read.
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=128)
    code = fields.CharField(max_length=32, unique=True, index=True)  # Join token
    created_by = fields.CharField(max_length=256)  # Creator email
    members = fields.JSONField(default=list)
    notes = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "channels"

    def find_member(self, *, email: str | None = None, user_id: str | None = None) -> dict | None:
        """Return the member snapshot matching ``email`` or ``user_id``."""
        for member in self.members:
            if email is not None and member.get("email") == email:
                return member
            if user_id is not None and member.get("userId") == user_id:
                return member
        return None

    def admin_count(self) -> int:
        return sum(1 for m in self.members if m.get("isAdmin"))
