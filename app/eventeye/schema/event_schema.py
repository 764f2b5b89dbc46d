from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime, date

from eventeye.schema.profile_schema import split_list


class Demographics(BaseModel):
    age_range: Optional[str] = None
    gender_split: Optional[str] = None
    majors: Optional[str] = None
    year_of_study: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class SocialReach(BaseModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    youtube: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def parse_audience_size(value):
    """Blank or unparseable input means "unknown", never an error."""
    if value is None or value == "":
        return None
    try:
        size = int(value)
    except (TypeError, ValueError):
        return None
    return size if size >= 0 else None


class EventCreate(BaseModel):
    name: str
    description: str
    event_date: date
    location: str
    audience_size: Optional[int] = None
    themes: Optional[List[str]] = None
    pitch_deck_url: Optional[str] = None
    demographics: Optional[Demographics] = None
    social_reach: Optional[SocialReach] = None

    @field_validator("themes", mode="before")
    @classmethod
    def split_themes(cls, v):
        return split_list(v)

    @field_validator("audience_size", mode="before")
    @classmethod
    def clean_audience_size(cls, v):
        return parse_audience_size(v)

    model_config = ConfigDict(extra="ignore")


class EventUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[date] = None
    location: Optional[str] = None
    audience_size: Optional[int] = None
    themes: Optional[List[str]] = None
    pitch_deck_url: Optional[str] = None
    demographics: Optional[Demographics] = None
    social_reach: Optional[SocialReach] = None

    @field_validator("themes", mode="before")
    @classmethod
    def split_themes(cls, v):
        return split_list(v)

    @field_validator("audience_size", mode="before")
    @classmethod
    def clean_audience_size(cls, v):
        return parse_audience_size(v)

    # status and view_count cannot be edited here
    model_config = ConfigDict(extra="ignore")


class EventOut(BaseModel):
    id: str
    organizer_id: str
    name: str
    description: str
    event_date: date
    location: str
    audience_size: Optional[int] = None
    themes: List[str] = []
    status: str
    view_count: int = 0
    pitch_deck_url: Optional[str] = None
    demographics: Optional[Demographics] = None
    social_reach: Optional[SocialReach] = None
    created_at: datetime

    @field_validator("themes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    model_config = ConfigDict(from_attributes=True)


class OrganizerSummary(BaseModel):
    club_name: str
    college: str


class CatalogEvent(EventOut):
    """A published event as held in a sponsor's local catalog."""
    organizer: OrganizerSummary


class OrganizerStats(BaseModel):
    total_events: int
    total_views: int
    published: int
    drafts: int
