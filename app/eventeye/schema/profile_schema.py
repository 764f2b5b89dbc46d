from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from typing import Optional, List, Literal
from datetime import datetime

class SocialLinks(BaseModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def split_list(value):
    """Accept "a, b, c" as well as ["a", "b"]; drop blanks."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


class OrganizerFields(BaseModel):
    club_name: str = ""
    college: str = ""
    description: Optional[str] = None
    social_links: Optional[SocialLinks] = None

    model_config = ConfigDict(extra="ignore")


class SponsorFields(BaseModel):
    company_name: str = ""
    industry: str = ""
    website: Optional[str] = None
    budget_range: Optional[str] = None
    marketing_goals: Optional[List[str]] = None
    target_audience: Optional[List[str]] = None

    @field_validator("marketing_goals", "target_audience", mode="before")
    @classmethod
    def split_lists(cls, v):
        return split_list(v)

    model_config = ConfigDict(extra="ignore")


class ProfileSetup(BaseModel):
    role: Literal["organizer", "sponsor"]
    full_name: str
    avatar_url: Optional[str] = None
    organizer: Optional[OrganizerFields] = None
    sponsor: Optional[SponsorFields] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    # organizer
    club_name: Optional[str] = None
    college: Optional[str] = None
    description: Optional[str] = None
    social_links: Optional[SocialLinks] = None
    # sponsor
    company_name: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    budget_range: Optional[str] = None
    marketing_goals: Optional[List[str]] = None
    target_audience: Optional[List[str]] = None

    @field_validator("marketing_goals", "target_audience", mode="before")
    @classmethod
    def split_lists(cls, v):
        return split_list(v)

    model_config = ConfigDict(extra="ignore")


class ProfileOut(BaseModel):
    id: str
    user_id: str
    email: EmailStr
    full_name: str
    role: str
    avatar_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrganizerProfileOut(BaseModel):
    id: str
    profile_id: str
    club_name: str
    college: str
    description: Optional[str] = None
    social_links: Optional[SocialLinks] = None

    model_config = ConfigDict(from_attributes=True)


class SponsorProfileOut(BaseModel):
    id: str
    profile_id: str
    company_name: str
    industry: str
    website: Optional[str] = None
    budget_range: Optional[str] = None
    marketing_goals: List[str] = []
    target_audience: List[str] = []

    @field_validator("marketing_goals", "target_audience", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    model_config = ConfigDict(from_attributes=True)


class SponsorListing(SponsorProfileOut):
    full_name: str
