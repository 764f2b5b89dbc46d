from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional, Literal
from datetime import datetime

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    role: Optional[Literal["organizer", "sponsor"]] = None
    full_name: str

class SignInRequest(BaseModel):
    email: EmailStr
    password: str

class GoogleSignInRequest(BaseModel):
    id_token: str

class AuthUserOut(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    provider: str
    requested_role: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: AuthUserOut
