from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class MessageCreate(BaseModel):
    recipient_id: str
    content: str
    event_id: Optional[str] = None

class MessageOut(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    event_id: Optional[str] = None
    content: str
    created_at: datetime
    read_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
