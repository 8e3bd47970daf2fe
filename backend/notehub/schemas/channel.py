"""
Pydantic schemas for channel endpoints.
"""
from typing import List, Optional

from pydantic import BaseModel

__all__ = [
    "CreateChannelIn",
    "JoinChannelIn",
    "RemoveMemberIn",
    "ChannelSummary",
    "ChannelOut",
    "ChannelMemberOut",
    "ChannelInfo",
    "ChannelNoteOut",
    "ChannelDetailOut",
]


class CreateChannelIn(BaseModel):
    name: str
    createdBy: str  # Creator email


class JoinChannelIn(BaseModel):
    code: str  # 10-character join code
    userEmail: str


class RemoveMemberIn(BaseModel):
    channelId: str
    userId: str  # Member to remove
    currentUserEmail: str  # Requester, must be a channel admin


class ChannelSummary(BaseModel):
    """
    Channel as listed for one user.
    memberCount/noteCount are computed from the stored lists on every read.
    """
    id: str
    name: str
    code: str
    createdBy: str
    memberCount: int
    noteCount: int
    isAdmin: bool  # Whether the requesting user is an admin of this channel


class ChannelOut(BaseModel):
    message: str
    channel: ChannelSummary


class ChannelMemberOut(BaseModel):
    id: str  # User id
    username: str
    email: str
    isAdmin: bool
    joinedAt: Optional[str] = None


class ChannelInfo(BaseModel):
    id: str
    name: str
    code: str
    createdBy: str
    createdAt: Optional[str] = None


class ChannelNoteOut(BaseModel):
    id: str
    title: Optional[str] = None  # Topic, or the file name when no topic was given
    subject: Optional[str] = None
    subjectCode: Optional[str] = None
    regulation: Optional[str] = None
    year: Optional[str] = None
    description: Optional[str] = None
    fileType: str
    uploadedBy: str
    uploadDate: Optional[str] = None
    fileUrl: str


class ChannelDetailOut(BaseModel):
    channel: ChannelInfo
    members: List[ChannelMemberOut]
    notes: List[ChannelNoteOut]
