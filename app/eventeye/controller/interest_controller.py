import logging
from typing import List

from sqlalchemy.orm import Session

from eventeye.database import commit_or_fail
from eventeye.errors import NotFoundError
from eventeye.models.event_model import Event
from eventeye.models.interest_model import SponsorInterest

logger = logging.getLogger(__name__)


# ------------------ Retrieve Interests ------------------
async def list_interest_event_ids(db: Session, sponsor_id: str) -> List[str]:
    rows = db.query(SponsorInterest.event_id).filter(SponsorInterest.sponsor_id == sponsor_id).all()
    return [event_id for (event_id,) in rows]


async def list_interests_for_event(db: Session, event_id: str) -> List[SponsorInterest]:
    return (
        db.query(SponsorInterest)
        .filter(SponsorInterest.event_id == event_id)
        .order_by(SponsorInterest.created_at.desc())
        .all()
    )


# ------------------ Add Interest ------------------
async def add_interest(db: Session, sponsor_id: str, event_id: str) -> SponsorInterest:
    """Insert the pair. A second insert for the same pair fails on the unique constraint."""
    published = db.query(Event.id).filter(Event.id == event_id, Event.status == "published").first()
    if not published:
        raise NotFoundError("Event not found")

    interest = SponsorInterest(sponsor_id=sponsor_id, event_id=event_id, status="interested")
    db.add(interest)
    commit_or_fail(db, "add interest")
    db.refresh(interest)
    logger.info(f"Sponsor {sponsor_id} interested in event {event_id}")
    return interest


# ------------------ Remove Interest ------------------
async def remove_interest(db: Session, sponsor_id: str, event_id: str) -> int:
    deleted = (
        db.query(SponsorInterest)
        .filter(SponsorInterest.sponsor_id == sponsor_id, SponsorInterest.event_id == event_id)
        .delete(synchronize_session=False)
    )
    commit_or_fail(db, "remove interest")
    logger.info(f"Sponsor {sponsor_id} removed interest in event {event_id}")
    return deleted
