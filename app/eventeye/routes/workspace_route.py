from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from eventeye.controller.discovery import FilterCriteria
from eventeye.controller.workspace import SponsorWorkspace
from eventeye.database import get_db
from eventeye.deps import get_workspace
from eventeye.errors import EventEyeError
from eventeye.response_model import ResponseModel, ErrorResponseModel

router = APIRouter()


def _failed(response: Response, workspace: SponsorWorkspace, error: EventEyeError):
    response.status_code = error.status_code
    return ErrorResponseModel(error.title, error.status_code, error.message,
                              notices=workspace.notifier.drain())


def _events_payload(workspace: SponsorWorkspace) -> dict:
    return {
        "events": workspace.filtered_events,
        "interests": sorted(workspace.interests),
        "filters": {
            "search": workspace.criteria.search_term,
            "theme": workspace.criteria.theme,
            "location": workspace.criteria.location,
        },
    }


# ----------------------- DISCOVER EVENTS -----------------------
@router.get("/events", response_description="Cached catalog filtered by search, theme and location")
async def discover_events(
    search: Optional[str] = None,
    theme: Optional[str] = None,
    location: Optional[str] = None,
    workspace: SponsorWorkspace = Depends(get_workspace),
):
    workspace.set_filters(FilterCriteria.build(search, theme, location))
    return ResponseModel(_events_payload(workspace), "Events filtered successfully")


# ----------------------- FILTER OPTIONS -----------------------
@router.get("/options", response_description="Themes and locations present in the catalog")
async def filter_options(workspace: SponsorWorkspace = Depends(get_workspace)):
    return ResponseModel(workspace.filter_options(), "Filter options retrieved")


# ----------------------- RECOMMENDATIONS -----------------------
@router.get("/recommendations", response_description="Events matching the sponsor's marketing goals")
async def recommendations(workspace: SponsorWorkspace = Depends(get_workspace)):
    return ResponseModel(workspace.recommendations(), "Recommendations retrieved")


# ----------------------- STATS -----------------------
@router.get("/stats", response_description="Counts for the sponsor dashboard")
async def stats(workspace: SponsorWorkspace = Depends(get_workspace)):
    return ResponseModel(workspace.stats(), "Stats retrieved")


# ----------------------- REFRESH -----------------------
@router.post("/refresh", response_description="Re-fetch the catalog and interests")
async def refresh(response: Response, workspace: SponsorWorkspace = Depends(get_workspace),
                  db: Session = Depends(get_db)):
    try:
        await workspace.refresh(db)
    except EventEyeError as e:
        return _failed(response, workspace, e)
    return ResponseModel(_events_payload(workspace), "Catalog refreshed")


# ----------------------- INTERESTS -----------------------
@router.get("/interests", response_description="Event ids the sponsor is interested in")
async def interests(workspace: SponsorWorkspace = Depends(get_workspace)):
    return ResponseModel(sorted(workspace.interests), "Interests retrieved")


@router.post("/interests/{event_id}/toggle", response_description="Toggle interest in an event")
async def toggle_interest(event_id: str, response: Response,
                          workspace: SponsorWorkspace = Depends(get_workspace),
                          db: Session = Depends(get_db)):
    try:
        interested = await workspace.toggle_interest(db, event_id)
    except EventEyeError as e:
        return _failed(response, workspace, e)
    notices = workspace.notifier.drain()
    return ResponseModel(
        {"event_id": event_id, "interested": interested, "notices": notices},
        notices[-1]["message"],
    )


# ----------------------- RECORD VIEW -----------------------
@router.post("/events/{event_id}/view", response_description="Record a view of an event card")
async def record_view(event_id: str, response: Response,
                      workspace: SponsorWorkspace = Depends(get_workspace),
                      db: Session = Depends(get_db)):
    try:
        view_count = await workspace.record_view(db, event_id)
    except EventEyeError as e:
        return _failed(response, workspace, e)
    return ResponseModel({"event_id": event_id, "view_count": view_count}, "View recorded")


__all__ = ["router"]
