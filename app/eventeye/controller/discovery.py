"""In-memory discovery over an already fetched catalog.

Nothing here touches the store. Every function is pure and keeps the
order of its input.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from eventeye.schema.event_schema import CatalogEvent
from eventeye.schema.profile_schema import SponsorListing


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    theme: str = ""
    location: str = ""

    @classmethod
    def build(cls, search_term: Optional[str] = None, theme: Optional[str] = None,
              location: Optional[str] = None) -> "FilterCriteria":
        return cls(search_term or "", theme or "", location or "")

    @property
    def is_empty(self) -> bool:
        return not (self.search_term or self.theme or self.location)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle in (haystack or "").lower()


def matches_search(event: CatalogEvent, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.lower()
    return (
        _contains(event.name, term)
        or _contains(event.description, term)
        or _contains(event.organizer.club_name, term)
        or _contains(event.organizer.college, term)
    )


def matches_theme(event: CatalogEvent, theme: str) -> bool:
    if not theme:
        return True
    return theme.lower() in (t.lower() for t in event.themes or [])


def matches_location(event: CatalogEvent, location: str) -> bool:
    if not location:
        return True
    return _contains(event.location, location.lower())


def filter_events(events: Sequence[CatalogEvent], criteria: FilterCriteria) -> List[CatalogEvent]:
    return [
        event for event in events
        if matches_search(event, criteria.search_term)
        and matches_theme(event, criteria.theme)
        and matches_location(event, criteria.location)
    ]


def unique_themes(events: Iterable[CatalogEvent]) -> List[str]:
    return list(dict.fromkeys(theme for event in events for theme in event.themes or []))


def unique_locations(events: Iterable[CatalogEvent]) -> List[str]:
    return list(dict.fromkeys(event.location for event in events))


def catalog_stats(events: Sequence[CatalogEvent]) -> dict:
    count = len(events)
    total_audience = sum(event.audience_size or 0 for event in events)
    return {
        "available_events": count,
        "average_audience": round(total_audience / count) if count else 0,
        "colleges": len({event.organizer.college for event in events}),
    }


def recommend_events(events: Sequence[CatalogEvent], marketing_goals: Optional[Sequence[str]],
                     limit: int = 3) -> List[CatalogEvent]:
    """Events sharing a theme with the sponsor's goals.

    A theme and a goal match when either contains the other, ignoring case.
    """
    goals = [goal.lower() for goal in marketing_goals or [] if goal]
    if not goals:
        return []

    def relevant(event):
        return any(
            theme.lower() in goal or goal in theme.lower()
            for theme in event.themes or [] if theme
            for goal in goals
        )

    return [event for event in events if relevant(event)][:limit]


def filter_sponsors(sponsors: Sequence[SponsorListing], search_term: Optional[str] = None,
                    industry: Optional[str] = None) -> List[SponsorListing]:
    term = (search_term or "").lower()
    return [
        sponsor for sponsor in sponsors
        if (not term or _contains(sponsor.company_name, term) or _contains(sponsor.industry, term))
        and (not industry or sponsor.industry == industry)
    ]
