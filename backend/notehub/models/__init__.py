# notehub/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Account, credentials and upload credits
- Note: Metadata of an uploaded document (bytes live in the blob store)
- Channel: Invite-by-code sharing group with a member snapshot list
"""
from .user import User
from .note import Note
from .channel import Channel
