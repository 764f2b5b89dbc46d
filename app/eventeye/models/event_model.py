import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, ForeignKey, JSON
from sqlalchemy.orm import relationship
from eventeye.database import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    organizer_id = Column(String, ForeignKey("organizer_profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(Date, nullable=False)
    location = Column(String, nullable=False)
    audience_size = Column(Integer, nullable=True)
    themes = Column(JSON, nullable=True)
    status = Column(String, default="draft", nullable=False)  # draft, published
    view_count = Column(Integer, default=0, nullable=False)
    pitch_deck_url = Column(String, nullable=True)
    demographics = Column(JSON, nullable=True)
    social_reach = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organizer = relationship("OrganizerProfile", back_populates="events")
    interests = relationship("SponsorInterest", back_populates="event", cascade="all, delete-orphan")
    messages = relationship("Message", back_populates="event")
