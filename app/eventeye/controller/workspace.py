"""Per-session sponsor state: the fetched catalog, the interest set and the
current filters.

Local state only changes after the store call it mirrors has succeeded.
View counts are bumped locally without reading the stored value back, so a
long-lived workspace can drift from the store; ``refresh`` re-fetches the
whole catalog and is the only reconciliation point.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session

from eventeye.controller import event_controller, interest_controller
from eventeye.controller.discovery import (
    FilterCriteria, catalog_stats, filter_events, recommend_events,
    unique_locations, unique_themes,
)
from eventeye.controller.notifications import Notifier
from eventeye.controller.profile_controller import ResolvedProfile
from eventeye.errors import BackendError, MutationInProgressError, NotFoundError, friendly_message
from eventeye.schema.event_schema import CatalogEvent

logger = logging.getLogger(__name__)


class SponsorWorkspace:

    def __init__(self, sponsor: ResolvedProfile, notifier: Optional[Notifier] = None):
        if not sponsor.is_sponsor:
            raise NotFoundError("You need to be a sponsor to express interest")
        self.sponsor = sponsor
        self.profile_id = sponsor.profile.id
        self.sponsor_id = sponsor.extension.id
        self.notifier = notifier or Notifier()
        self.events: List[CatalogEvent] = []
        self.interests: Set[str] = set()
        self.criteria = FilterCriteria()
        self.loaded = False
        self.expires_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _mutation(self):
        if self._lock.locked():
            raise MutationInProgressError("Another update is still in progress")
        async with self._lock:
            yield

    async def _load(self, db: Session):
        self.events = await event_controller.list_published_events(db)
        self.interests = set(await interest_controller.list_interest_event_ids(db, self.sponsor_id))
        self.loaded = True
        logger.info(f"Workspace for sponsor {self.sponsor_id} loaded "
                    f"{len(self.events)} events, {len(self.interests)} interests")

    async def ensure_loaded(self, db: Session):
        if not self.loaded:
            async with self._mutation():
                await self._load(db)

    async def refresh(self, db: Session):
        async with self._mutation():
            try:
                await self._load(db)
            except BackendError as e:
                self.notifier.error(friendly_message(e, "load events"))
                raise

    # ------------------ Filtering ------------------
    def set_filters(self, criteria: FilterCriteria):
        self.criteria = criteria

    @property
    def filtered_events(self) -> List[CatalogEvent]:
        return filter_events(self.events, self.criteria)

    def filter_options(self) -> dict:
        return {"themes": unique_themes(self.events), "locations": unique_locations(self.events)}

    def stats(self) -> dict:
        stats = catalog_stats(self.events)
        stats["interests"] = len(self.interests)
        return stats

    def recommendations(self, limit: int = 3) -> List[CatalogEvent]:
        return recommend_events(self.filtered_events, self.sponsor.extension.marketing_goals, limit)

    def is_interested(self, event_id: str) -> bool:
        return event_id in self.interests

    def find_event(self, event_id: str) -> CatalogEvent:
        for event in self.events:
            if event.id == event_id:
                return event
        raise NotFoundError("Event not found")

    # ------------------ Interest Toggle ------------------
    async def toggle_interest(self, db: Session, event_id: str) -> bool:
        """Flip membership for the event; returns whether it is now interested."""
        async with self._mutation():
            try:
                if self.is_interested(event_id):
                    await interest_controller.remove_interest(db, self.sponsor_id, event_id)
                    self.interests.discard(event_id)
                    self.notifier.success("Removed from interests")
                    return False

                self.find_event(event_id)
                await interest_controller.add_interest(db, self.sponsor_id, event_id)
                self.interests.add(event_id)
                self.notifier.success("Added to interests")
                return True
            except BackendError as e:
                self.notifier.error(friendly_message(e, "update interest"))
                raise

    # ------------------ View Counter ------------------
    async def record_view(self, db: Session, event_id: str) -> int:
        """Increment on the server, then bump the cached count by exactly one."""
        async with self._mutation():
            event = self.find_event(event_id)
            try:
                await event_controller.increment_view_count(db, event_id)
            except BackendError as e:
                logger.error(f"Error incrementing view count for {event_id}: {e}")
                raise
            event.view_count += 1
            return event.view_count


class WorkspaceRegistry:
    """Workspaces keyed by auth session id, dropped on sign-out or once the session expires."""

    def __init__(self):
        self._workspaces: Dict[str, SponsorWorkspace] = {}

    def get(self, session_id: str, sponsor: ResolvedProfile,
            expires_at: Optional[datetime] = None) -> SponsorWorkspace:
        self.sweep()
        workspace = self._workspaces.get(session_id)
        if workspace is None or workspace.profile_id != sponsor.profile.id:
            workspace = SponsorWorkspace(sponsor)
            self._workspaces[session_id] = workspace
        else:
            # keep the latest goals for recommendations
            workspace.sponsor = sponsor
        workspace.expires_at = expires_at
        return workspace

    def discard(self, session_id: str):
        self._workspaces.pop(session_id, None)

    def sweep(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.utcnow()
        expired = [session_id for session_id, workspace in self._workspaces.items()
                   if workspace.expires_at is not None and workspace.expires_at < now]
        for session_id in expired:
            del self._workspaces[session_id]
        if expired:
            logger.info(f"Dropped {len(expired)} expired workspaces")
        return len(expired)

    def __len__(self):
        return len(self._workspaces)
