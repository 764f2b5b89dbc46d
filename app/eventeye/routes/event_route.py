from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from eventeye.controller.event_controller import (
    create_event, delete_event, get_owned_event, increment_view_count, list_organizer_events,
    list_published_events, organizer_stats, publish_event, update_event,
)
from eventeye.controller.interest_controller import list_interests_for_event
from eventeye.controller.profile_controller import ResolvedProfile
from eventeye.database import get_db
from eventeye.deps import get_profile, get_session_context
from eventeye.response_model import ResponseModel
from eventeye.schema.event_schema import EventCreate, EventOut, EventUpdate
from eventeye.schema.interest_schema import InterestOut

router = APIRouter()


# ----------------------- GET PUBLISHED EVENTS -----------------------
@router.get("/published", response_description="Published events with organizer info",
            dependencies=[Depends(get_session_context)])
async def get_published_events(db: Session = Depends(get_db)):
    events = await list_published_events(db)
    return ResponseModel(events, "Events retrieved successfully")


# ----------------------- GET MY EVENTS -----------------------
@router.get("/mine", response_description="Events of the current organizer")
async def get_my_events(owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    events = await list_organizer_events(db, owner)
    return ResponseModel([EventOut.model_validate(e) for e in events], "Events retrieved successfully")


# ----------------------- ADD EVENT -----------------------
@router.post("/add", response_description="Create a draft event")
async def add_event(
    event_data: EventCreate,
    owner: ResolvedProfile = Depends(get_profile),
    db: Session = Depends(get_db),
):
    new_event = await create_event(db, owner, event_data)
    return ResponseModel(EventOut.model_validate(new_event), "Event created successfully!")


# ----------------------- UPDATE EVENT -----------------------
@router.put("/update/{event_id}", response_description="Update an event")
async def edit_event(
    event_id: str,
    update_data: EventUpdate = Body(...),
    owner: ResolvedProfile = Depends(get_profile),
    db: Session = Depends(get_db),
):
    event = await update_event(db, owner, event_id, update_data)
    return ResponseModel(EventOut.model_validate(event), "Event updated successfully")


# ----------------------- PUBLISH EVENT -----------------------
@router.put("/publish/{event_id}", response_description="Publish a draft event")
async def publish(event_id: str, owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    event = await publish_event(db, owner, event_id)
    return ResponseModel(EventOut.model_validate(event), "Event published successfully!")


# ----------------------- DELETE EVENT -----------------------
@router.delete("/{event_id}", response_description="Delete a draft event")
async def remove_event(event_id: str, owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    await delete_event(db, owner, event_id)
    return ResponseModel({"id": event_id}, "Event deleted successfully")


# ----------------------- RECORD VIEW -----------------------
@router.post("/view/{event_id}", response_description="Increment the view counter",
             dependencies=[Depends(get_session_context)])
async def record_view(event_id: str, db: Session = Depends(get_db)):
    await increment_view_count(db, event_id)
    return ResponseModel({"id": event_id}, "View recorded")


# ----------------------- INTERESTED SPONSORS -----------------------
@router.get("/interests/{event_id}", response_description="Sponsors interested in an event")
async def get_event_interests(event_id: str, owner: ResolvedProfile = Depends(get_profile),
                              db: Session = Depends(get_db)):
    await get_owned_event(db, owner, event_id)
    interests = await list_interests_for_event(db, event_id)
    return ResponseModel([InterestOut.model_validate(i) for i in interests], "Interests retrieved successfully")


# ----------------------- ORGANIZER STATS -----------------------
@router.get("/stats", response_description="Counts for the organizer dashboard")
async def get_stats(owner: ResolvedProfile = Depends(get_profile), db: Session = Depends(get_db)):
    return ResponseModel(await organizer_stats(db, owner), "Stats retrieved successfully")


__all__ = ["router"]
