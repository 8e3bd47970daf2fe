"""
Channel Workflow

Creating channels with unique join codes, joining by code, listing a
user's channels, channel details, and admin-only member removal.
"""
import datetime as dt
import logging
import secrets
import string
import uuid
from typing import Optional

from tortoise.exceptions import IntegrityError

from notehub.config import settings
from notehub.core.errors import (
    AlreadyMember,
    ChannelNotFound,
    CodespaceExhausted,
    Forbidden,
    InvalidInput,
    LastAdmin,
    MemberNotFound,
)
from notehub.models.channel import Channel
from notehub.models.note import Note
from notehub.models.user import User
from notehub.services.account_service import get_user_by_email
from notehub.services.note_service import note_card

logger = logging.getLogger("uvicorn.error")

CODE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def parse_id(raw: Optional[str]) -> Optional[uuid.UUID]:
    """Parse a client-supplied id; None when it is not a UUID."""
    if not raw:
        return None
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


async def get_channel(channel_id: Optional[str]) -> Optional[Channel]:
    cid = parse_id(channel_id)
    if cid is None:
        return None
    return await Channel.get_or_none(id=cid)


def generate_code(length: Optional[int] = None) -> str:
    """Draw a join code uniformly from [A-Za-z0-9]."""
    length = length or settings.channel_code_length
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


async def generate_unique_code(max_attempts: Optional[int] = None) -> str:
    """
    Draw codes until one is not held by any channel.

    Raises:
        CodespaceExhausted: Every attempt collided
    """
    max_attempts = max_attempts or settings.channel_code_max_attempts
    for _ in range(max_attempts):
        code = generate_code()
        if not await Channel.filter(code=code).exists():
            return code
    raise CodespaceExhausted()


def channel_summary(c: Channel, email: str) -> dict:
    """Summary with live counts and the admin flag of ``email``."""
    member = c.find_member(email=email)
    return {
        "id": str(c.id),
        "name": c.name,
        "code": c.code,
        "createdBy": c.created_by,
        "memberCount": len(c.members),
        "noteCount": len(c.notes),
        "isAdmin": bool(member and member.get("isAdmin")),
    }


def _member_snapshot(u: User, is_admin: bool) -> dict:
    return {
        "userId": str(u.id),
        "username": u.username,
        "email": u.email,
        "isAdmin": is_admin,
        "joinedAt": utc_now().isoformat(),
    }


async def _add_joined_channel(u: User, channel_id: str) -> None:
    if channel_id not in u.joined_channels:
        u.joined_channels = [*u.joined_channels, channel_id]
        await u.save(update_fields=["joined_channels"])


async def create_channel(name: str, created_by: str) -> dict:
    """
    Create a channel whose only member is its creator, as admin.

    The code is re-drawn if the insert hits the unique constraint (a
    concurrent creation took the same code after our existence check).
    """
    u = await get_user_by_email(created_by)
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Channel name is required")

    c = None
    for _ in range(settings.channel_code_max_attempts):
        code = await generate_unique_code()
        try:
            c = await Channel.create(
                name=name,
                code=code,
                created_by=u.email,
                members=[_member_snapshot(u, is_admin=True)],
                notes=[],
            )
            break
        except IntegrityError:
            logger.warning("[channels] code collision on insert -> %s, retrying", code)
    if c is None:
        raise CodespaceExhausted()

    await _add_joined_channel(u, str(c.id))
    logger.info("[channels] created %s (%s) by %s", c.name, c.code, u.email)
    return channel_summary(c, u.email)


async def join_channel(code: str, user_email: str) -> dict:
    u = await get_user_by_email(user_email)
    c = await Channel.get_or_none(code=code) if code else None
    if not c:
        raise ChannelNotFound()
    if c.find_member(email=u.email):
        raise AlreadyMember()

    c.members = [*c.members, _member_snapshot(u, is_admin=False)]
    await c.save(update_fields=["members"])
    await _add_joined_channel(u, str(c.id))
    return channel_summary(c, u.email)


async def list_user_channels(email: str) -> list[dict]:
    u = await get_user_by_email(email)
    ids = [cid for cid in (parse_id(raw) for raw in u.joined_channels) if cid is not None]
    if not ids:
        return []
    by_id = {c.id: c for c in await Channel.filter(id__in=ids)}
    # Keep join order; ids of channels that no longer resolve are skipped
    return [channel_summary(by_id[cid], email) for cid in ids if cid in by_id]


async def get_channel_details(channel_id: str) -> dict:
    c = await get_channel(channel_id)
    if not c:
        raise ChannelNotFound()

    note_ids = [nid for nid in (parse_id(raw) for raw in c.notes) if nid is not None]
    by_id = {n.id: n for n in await Note.filter(id__in=note_ids)} if note_ids else {}
    notes = [note_card(by_id[nid]) for nid in note_ids if nid in by_id]

    members = [{
        "id": m.get("userId"),
        "username": m.get("username"),
        "email": m.get("email"),
        "isAdmin": bool(m.get("isAdmin")),
        "joinedAt": m.get("joinedAt"),
    } for m in c.members]

    return {
        "channel": {
            "id": str(c.id),
            "name": c.name,
            "code": c.code,
            "createdBy": c.created_by,
            "createdAt": c.created_at.isoformat() if c.created_at else None,
        },
        "members": members,
        "notes": notes,
    }


async def remove_member(channel_id: str, user_id: str, requester_email: str) -> None:
    """
    Remove ``user_id`` from the channel on behalf of ``requester_email``.

    Raises:
        ChannelNotFound: Unknown channel
        Forbidden: Requester is not an admin member
        MemberNotFound: Target is not a member
        LastAdmin: Target is the only remaining admin
    """
    c = await get_channel(channel_id)
    if not c:
        raise ChannelNotFound()

    requester = c.find_member(email=requester_email)
    if not requester or not requester.get("isAdmin"):
        raise Forbidden()

    target_id = parse_id(user_id)
    target = c.find_member(user_id=str(target_id)) if target_id else None
    if not target:
        raise MemberNotFound()
    if target.get("isAdmin") and c.admin_count() <= 1:
        raise LastAdmin()

    c.members = [m for m in c.members if m.get("userId") != str(target_id)]
    await c.save(update_fields=["members"])

    u = await User.get_or_none(id=target_id)
    if u:
        cid = str(c.id)
        u.joined_channels = [j for j in u.joined_channels if j != cid]
        await u.save(update_fields=["joined_channels"])
    logger.info("[channels] %s removed %s from %s", requester_email, target.get("email"), c.code)


async def attach_note(channel_id: Optional[str], note_id: str) -> bool:
    """
    Append a note to a channel's notes list.

    Unknown or malformed channel ids are ignored; returns whether the note
    was attached.
    """
    c = await get_channel(channel_id)
    if not c:
        return False
    c.notes = [*c.notes, note_id]
    await c.save(update_fields=["notes"])
    logger.info('[channels] note %s added to channel "%s"', note_id, c.name)
    return True
