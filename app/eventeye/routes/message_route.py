from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventeye.controller.message_controller import (
    list_inbox, list_sent, mark_read, send_message, unread_count,
)
from eventeye.controller.profile_controller import ResolvedProfile
from eventeye.database import get_db
from eventeye.deps import get_profile
from eventeye.response_model import ResponseModel
from eventeye.schema.message_schema import MessageCreate, MessageOut

router = APIRouter()


# ----------------------- SEND MESSAGE -----------------------
@router.post("/send", response_description="Send a message to another profile")
async def send(payload: MessageCreate, sender: ResolvedProfile = Depends(get_profile),
               db: Session = Depends(get_db)):
    message = await send_message(db, sender.profile, payload.recipient_id, payload.content, payload.event_id)
    return ResponseModel(MessageOut.model_validate(message), "Message sent")


# ----------------------- INBOX -----------------------
@router.get("/inbox", response_description="Messages received, newest first")
async def inbox(owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    messages = await list_inbox(db, owner.profile)
    return ResponseModel([MessageOut.model_validate(m) for m in messages], "Messages retrieved")


@router.get("/sent", response_description="Messages sent, newest first")
async def sent(owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    messages = await list_sent(db, owner.profile)
    return ResponseModel([MessageOut.model_validate(m) for m in messages], "Messages retrieved")


@router.get("/unread", response_description="Number of unread messages")
async def unread(owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    return ResponseModel({"unread": await unread_count(db, owner.profile)}, "Unread count retrieved")


# ----------------------- MARK READ -----------------------
@router.put("/read/{message_id}", response_description="Mark a message as read")
async def read(message_id: str, owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    message = await mark_read(db, owner.profile, message_id)
    return ResponseModel(MessageOut.model_validate(message), "Message marked as read")


__all__ = ["router"]
