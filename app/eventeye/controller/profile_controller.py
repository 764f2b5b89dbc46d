import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.orm import Session

from eventeye.database import commit_or_fail
from eventeye.errors import BackendError, NotFoundError, PartialUpdateError, ValidationError
from eventeye.models.profile_model import Profile, OrganizerProfile, SponsorProfile, ROLES
from eventeye.models.user_model import AuthUser
from eventeye.schema.profile_schema import (
    OrganizerFields, SponsorFields, ProfileUpdate, SocialLinks, SponsorListing,
)

logger = logging.getLogger(__name__)

# fields that must be non-empty after trimming, per role
REQUIRED_FIELDS = {
    "organizer": ("club_name", "college"),
    "sponsor": ("company_name", "industry"),
}

ORGANIZER_FIELDS = ("club_name", "college", "description", "social_links")
SPONSOR_FIELDS = ("company_name", "industry", "website", "budget_range",
                  "marketing_goals", "target_audience")


@dataclass
class ResolvedProfile:
    profile: Profile
    extension: Union[OrganizerProfile, SponsorProfile]

    @property
    def role(self) -> str:
        return self.profile.role

    @property
    def is_sponsor(self) -> bool:
        return self.profile.role == "sponsor"


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def _check_required(full_name, role: str, fields: dict):
    missing = []
    if _blank(full_name):
        missing.append("full_name")
    missing.extend(name for name in REQUIRED_FIELDS[role] if _blank(fields.get(name)))
    if missing:
        raise ValidationError(f"Required fields are empty: {', '.join(missing)}", missing)


def _clean_social_links(links) -> Optional[dict]:
    if links is None:
        return None
    if isinstance(links, dict):
        links = SocialLinks(**links)
    return links.model_dump(exclude_none=True)


# ------------------ Resolve Profile ------------------
async def resolve_profile(db: Session, user_id: str) -> Optional[ResolvedProfile]:
    """Profile plus its role extension, or None when role selection is pending."""
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if not profile:
        return None

    model = OrganizerProfile if profile.role == "organizer" else SponsorProfile
    extension = db.query(model).filter(model.profile_id == profile.id).first()
    if not extension:
        logger.error(f"Profile {profile.id} has role {profile.role} but no extension row")
        raise NotFoundError(f"No {profile.role} profile found for this account")
    return ResolvedProfile(profile=profile, extension=extension)


async def require_profile(db: Session, user_id: str) -> ResolvedProfile:
    resolved = await resolve_profile(db, user_id)
    if resolved is None:
        raise NotFoundError("Complete your profile first")
    return resolved


# ------------------ Create Profile ------------------
async def create_profile(
    db: Session,
    user: AuthUser,
    role: str,
    full_name: str,
    organizer: Optional[OrganizerFields] = None,
    sponsor: Optional[SponsorFields] = None,
    avatar_url: Optional[str] = None,
) -> ResolvedProfile:
    if role not in ROLES:
        raise ValidationError(f"Unknown role: {role}", ["role"])

    fields = (organizer or OrganizerFields()) if role == "organizer" else (sponsor or SponsorFields())
    values = fields.model_dump()
    _check_required(full_name, role, values)

    if db.query(Profile).filter(Profile.user_id == user.id).first():
        raise BackendError("Profile already exists for this account")

    profile = Profile(
        user_id=user.id,
        email=user.email,
        full_name=full_name.strip(),
        role=role,
        avatar_url=avatar_url,
    )
    db.add(profile)
    db.flush()

    if role == "organizer":
        values["social_links"] = _clean_social_links(fields.social_links)
        extension = OrganizerProfile(profile_id=profile.id, **values)
    else:
        extension = SponsorProfile(profile_id=profile.id, **values)
    db.add(extension)

    # profile and extension land together or not at all
    commit_or_fail(db, "create profile")
    db.refresh(profile)
    db.refresh(extension)
    logger.info(f"Created {role} profile {profile.id} for user {user.id}")
    return ResolvedProfile(profile=profile, extension=extension)


# ------------------ Update Profile ------------------
async def update_profile(db: Session, resolved: ResolvedProfile, patch: ProfileUpdate) -> ResolvedProfile:
    """Save the editable copy of a profile.

    Validation happens first and issues no writes. The base row (name only)
    and the role row are then written as two separate commits; if the
    second fails the first is kept and the error names the failed step.
    """
    profile, extension = resolved.profile, resolved.extension
    changes = patch.model_dump(exclude_unset=True)

    field_names = ORGANIZER_FIELDS if resolved.role == "organizer" else SPONSOR_FIELDS
    merged = {name: changes.get(name, getattr(extension, name)) for name in field_names}
    full_name = changes.get("full_name", profile.full_name)
    _check_required(full_name, resolved.role, merged)

    if "social_links" in merged and "social_links" in changes:
        merged["social_links"] = _clean_social_links(changes["social_links"])

    profile.full_name = full_name.strip()
    try:
        commit_or_fail(db, "update profile")
    except BackendError as e:
        raise PartialUpdateError("Failed to update profile", failed_step="profile") from e

    for name, value in merged.items():
        setattr(extension, name, value)
    try:
        commit_or_fail(db, f"update {resolved.role} profile")
    except BackendError as e:
        raise PartialUpdateError(
            f"Profile name saved but {resolved.role} details failed to update",
            failed_step="extension",
            completed_steps=["profile"],
        ) from e

    db.refresh(profile)
    db.refresh(extension)
    logger.info(f"Updated profile {profile.id}")
    return resolved


# ------------------ Sponsor Directory ------------------
async def list_sponsors(db: Session):
    rows = (
        db.query(SponsorProfile, Profile.full_name)
        .join(Profile, SponsorProfile.profile_id == Profile.id)
        .order_by(SponsorProfile.created_at.desc())
        .all()
    )
    return [
        SponsorListing(**_sponsor_dict(sponsor), full_name=full_name)
        for sponsor, full_name in rows
    ]


def _sponsor_dict(sponsor: SponsorProfile) -> dict:
    return {
        "id": sponsor.id,
        "profile_id": sponsor.profile_id,
        "company_name": sponsor.company_name,
        "industry": sponsor.industry,
        "website": sponsor.website,
        "budget_range": sponsor.budget_range,
        "marketing_goals": sponsor.marketing_goals,
        "target_audience": sponsor.target_audience,
    }
