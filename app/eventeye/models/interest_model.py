import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from eventeye.database import Base

class SponsorInterest(Base):
    __tablename__ = "sponsor_interests"
    __table_args__ = (UniqueConstraint("sponsor_id", "event_id", name="uq_sponsor_event"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    sponsor_id = Column(String, ForeignKey("sponsor_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, nullable=False, default="interested")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    sponsor = relationship("SponsorProfile", back_populates="interests")
    event = relationship("Event", back_populates="interests")
