from pydantic import BaseModel, ConfigDict
from datetime import datetime

class InterestOut(BaseModel):
    id: str
    sponsor_id: str
    event_id: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
