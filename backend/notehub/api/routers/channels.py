# notehub/api/routers/channels.py
from typing import List

from fastapi import APIRouter

from notehub.core.errors import db_errors
from notehub.schemas.auth import MessageOut
from notehub.schemas.channel import (
    ChannelDetailOut,
    ChannelOut,
    ChannelSummary,
    CreateChannelIn,
    JoinChannelIn,
    RemoveMemberIn,
)
from notehub.services import channel_service

router = APIRouter(tags=["channels"])


@router.post("/create-channel", response_model=ChannelOut)
async def create_channel(body: CreateChannelIn):
    """
    Create a channel with a fresh 10-character join code.

    The creator becomes the first member and the channel's admin.

    Error codes:
        - USER_NOT_FOUND (404): Unknown creator email
        - BAD_REQUEST (400): Blank channel name
        - CODESPACE_EXHAUSTED (500): No free code found
    """
    with db_errors("Failed to create channel"):
        summary = await channel_service.create_channel(body.name, body.createdBy)
    return {"message": "Channel created successfully!", "channel": summary}


@router.post("/join-channel", response_model=ChannelOut)
async def join_channel(body: JoinChannelIn):
    """
    Join a channel by code as a regular (non-admin) member.

    Error codes:
        - USER_NOT_FOUND (404)
        - CHANNEL_NOT_FOUND (404): No channel with this code
        - ALREADY_MEMBER (400)
    """
    with db_errors("Failed to join channel"):
        summary = await channel_service.join_channel(body.code, body.userEmail)
    return {"message": "Successfully joined channel!", "channel": summary}


@router.get("/user-channels/{email}", response_model=List[ChannelSummary])
async def user_channels(email: str):
    """Channels the user has joined, in join order."""
    with db_errors("Failed to fetch channels"):
        return await channel_service.list_user_channels(email)


@router.get("/channel/{channel_id}", response_model=ChannelDetailOut)
async def channel_details(channel_id: str):
    """
    Channel info with its members and the full metadata of its notes.

    Error codes:
        - CHANNEL_NOT_FOUND (404): Unknown or malformed id
    """
    with db_errors("Failed to fetch channel details"):
        return await channel_service.get_channel_details(channel_id)


@router.post("/remove-user-from-channel", response_model=MessageOut)
async def remove_user_from_channel(body: RemoveMemberIn):
    """
    Remove a member; only channel admins may do this.

    An admin may remove themselves as long as another admin remains.

    Error codes:
        - CHANNEL_NOT_FOUND (404)
        - MEMBER_NOT_FOUND (404)
        - FORBIDDEN (403): Requester is not an admin of the channel
        - LAST_ADMIN_FORBIDDEN (400)
    """
    with db_errors("Failed to remove user from channel"):
        await channel_service.remove_member(body.channelId, body.userId, body.currentUserEmail)
    return {"message": "User removed from channel successfully"}
