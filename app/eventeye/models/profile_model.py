import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from eventeye.database import Base

ROLES = ("organizer", "sponsor")

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("auth_users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # organizer, sponsor
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("AuthUser", back_populates="profile")
    organizer_profile = relationship("OrganizerProfile", back_populates="profile", uselist=False, cascade="all, delete-orphan")
    sponsor_profile = relationship("SponsorProfile", back_populates="profile", uselist=False, cascade="all, delete-orphan")


class OrganizerProfile(Base):
    __tablename__ = "organizer_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    club_name = Column(String, nullable=False)
    college = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    social_links = Column(JSON, nullable=True)
    # e.g. {"instagram": "...", "linkedin": "..."}
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = relationship("Profile", back_populates="organizer_profile")
    events = relationship("Event", back_populates="organizer", cascade="all, delete-orphan")


class SponsorProfile(Base):
    __tablename__ = "sponsor_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    profile_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    company_name = Column(String, nullable=False)
    industry = Column(String, nullable=False)
    website = Column(String, nullable=True)
    budget_range = Column(String, nullable=True)
    marketing_goals = Column(JSON, nullable=True)
    target_audience = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = relationship("Profile", back_populates="sponsor_profile")
    interests = relationship("SponsorInterest", back_populates="sponsor", cascade="all, delete-orphan")
