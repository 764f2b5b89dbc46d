import logging
from typing import List

from sqlalchemy.orm import Session

from eventeye.controller.profile_controller import ResolvedProfile
from eventeye.database import commit_or_fail
from eventeye.errors import NotFoundError, PermissionDeniedError, ValidationError
from eventeye.models.event_model import Event
from eventeye.models.profile_model import OrganizerProfile
from eventeye.schema.event_schema import (
    CatalogEvent, EventCreate, EventOut, EventUpdate, OrganizerStats, OrganizerSummary,
)

logger = logging.getLogger(__name__)

REQUIRED_EVENT_FIELDS = ("name", "description", "location")


def _require_organizer(owner: ResolvedProfile) -> OrganizerProfile:
    if owner.role != "organizer":
        raise PermissionDeniedError("Only organizers can manage events")
    return owner.extension


def _owned_event(db: Session, owner: ResolvedProfile, event_id: str) -> Event:
    organizer = _require_organizer(owner)
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    if event.organizer_id != organizer.id:
        raise PermissionDeniedError("You can only manage your own events")
    return event


def _check_event_fields(values: dict):
    missing = [name for name in REQUIRED_EVENT_FIELDS
               if name in values and (values[name] is None or not str(values[name]).strip())]
    if missing:
        raise ValidationError(f"Required fields are empty: {', '.join(missing)}", missing)


# ------------------ Retrieve Owned Event ------------------
async def get_owned_event(db: Session, owner: ResolvedProfile, event_id: str) -> Event:
    return _owned_event(db, owner, event_id)


# ------------------ Add New Event ------------------
async def create_event(db: Session, owner: ResolvedProfile, event_data: EventCreate) -> Event:
    organizer = _require_organizer(owner)
    values = event_data.model_dump(exclude_none=True)
    _check_event_fields(values)

    new_event = Event(
        organizer_id=organizer.id,
        status="draft",
        view_count=0,
        **values,
    )
    db.add(new_event)
    commit_or_fail(db, "create event")
    db.refresh(new_event)
    logger.info(f"Organizer {organizer.id} created draft event {new_event.id}")
    return new_event


# ------------------ Retrieve Published Catalog ------------------
async def list_published_events(db: Session) -> List[CatalogEvent]:
    """All published events, newest first, each with its organizer's public fields.

    The inner join drops events whose organizer row is missing.
    """
    rows = (
        db.query(Event, OrganizerProfile.club_name, OrganizerProfile.college)
        .join(OrganizerProfile, Event.organizer_id == OrganizerProfile.id)
        .filter(Event.status == "published")
        .order_by(Event.created_at.desc())
        .all()
    )
    return [
        CatalogEvent(
            **EventOut.model_validate(event).model_dump(),
            organizer=OrganizerSummary(club_name=club_name, college=college),
        )
        for event, club_name, college in rows
    ]


# ------------------ Retrieve Organizer Events ------------------
async def list_organizer_events(db: Session, owner: ResolvedProfile) -> List[Event]:
    organizer = _require_organizer(owner)
    return (
        db.query(Event)
        .filter(Event.organizer_id == organizer.id)
        .order_by(Event.created_at.desc())
        .all()
    )


# ------------------ Update Event ------------------
async def update_event(db: Session, owner: ResolvedProfile, event_id: str, update_data: EventUpdate) -> Event:
    event = _owned_event(db, owner, event_id)
    changes = update_data.model_dump(exclude_unset=True)
    _check_event_fields(changes)

    for key, val in changes.items():
        setattr(event, key, val)

    commit_or_fail(db, "update event")
    db.refresh(event)
    return event


# ------------------ Publish Event ------------------
async def publish_event(db: Session, owner: ResolvedProfile, event_id: str) -> Event:
    event = _owned_event(db, owner, event_id)
    if event.status == "published":
        return event

    event.status = "published"
    commit_or_fail(db, "publish event")
    db.refresh(event)
    logger.info(f"Published event {event.id}")
    return event


# ------------------ Delete Event ------------------
async def delete_event(db: Session, owner: ResolvedProfile, event_id: str) -> Event:
    event = _owned_event(db, owner, event_id)
    if event.status != "draft":
        raise PermissionDeniedError("Published events cannot be deleted")

    db.delete(event)
    commit_or_fail(db, "delete event")
    logger.info(f"Deleted draft event {event_id}")
    return event


# ------------------ Increment View Count ------------------
async def increment_view_count(db: Session, event_id: str) -> None:
    """Atomic server-side increment of a published event; the new value is not read back."""
    updated = (
        db.query(Event)
        .filter(Event.id == event_id, Event.status == "published")
        .update({Event.view_count: Event.view_count + 1}, synchronize_session=False)
    )
    commit_or_fail(db, "record view")
    if not updated:
        raise NotFoundError("Event not found")


# ------------------ Organizer Analysis ------------------
async def organizer_stats(db: Session, owner: ResolvedProfile) -> OrganizerStats:
    events = await list_organizer_events(db, owner)
    return OrganizerStats(
        total_events=len(events),
        total_views=sum(event.view_count or 0 for event in events),
        published=sum(1 for event in events if event.status == "published"),
        drafts=sum(1 for event in events if event.status == "draft"),
    )
