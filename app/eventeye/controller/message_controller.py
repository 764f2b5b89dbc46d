import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from eventeye.database import commit_or_fail
from eventeye.errors import NotFoundError, PermissionDeniedError, ValidationError
from eventeye.models.event_model import Event
from eventeye.models.message_model import Message
from eventeye.models.profile_model import Profile

logger = logging.getLogger(__name__)


# ------------------ Send Message ------------------
async def send_message(db: Session, sender: Profile, recipient_id: str, content: str,
                       event_id: Optional[str] = None) -> Message:
    if not content or not content.strip():
        raise ValidationError("Message cannot be empty", ["content"])
    if recipient_id == sender.id:
        raise ValidationError("You cannot message yourself", ["recipient_id"])
    if not db.query(Profile).filter(Profile.id == recipient_id).first():
        raise NotFoundError("Recipient not found")
    if event_id and not db.query(Event).filter(Event.id == event_id).first():
        raise NotFoundError("Event not found")

    message = Message(
        sender_id=sender.id,
        recipient_id=recipient_id,
        event_id=event_id,
        content=content.strip(),
    )
    db.add(message)
    commit_or_fail(db, "send message")
    db.refresh(message)
    return message


# ------------------ Retrieve Messages ------------------
async def list_inbox(db: Session, profile: Profile) -> List[Message]:
    return (
        db.query(Message)
        .filter(Message.recipient_id == profile.id)
        .order_by(Message.created_at.desc())
        .all()
    )


async def list_sent(db: Session, profile: Profile) -> List[Message]:
    return (
        db.query(Message)
        .filter(Message.sender_id == profile.id)
        .order_by(Message.created_at.desc())
        .all()
    )


async def unread_count(db: Session, profile: Profile) -> int:
    return (
        db.query(Message)
        .filter(Message.recipient_id == profile.id, Message.read_at.is_(None))
        .count()
    )


# ------------------ Mark Read ------------------
async def mark_read(db: Session, profile: Profile, message_id: str) -> Message:
    """Set read_at once. Later calls leave the first timestamp in place."""
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise NotFoundError("Message not found")
    if message.recipient_id != profile.id:
        raise PermissionDeniedError("Only the recipient can mark a message as read")
    if message.read_at is not None:
        return message

    message.read_at = datetime.utcnow()
    commit_or_fail(db, "mark message read")
    db.refresh(message)
    return message
