from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from eventeye.controller.auth_controller import SessionContext
from eventeye.controller.profile_controller import (
    ResolvedProfile, create_profile, resolve_profile, update_profile,
)
from eventeye.database import get_db
from eventeye.deps import get_profile, get_session_context
from eventeye.response_model import ResponseModel, ErrorResponseModel
from eventeye.schema.profile_schema import (
    OrganizerProfileOut, ProfileOut, ProfileSetup, ProfileUpdate, SponsorProfileOut,
)

router = APIRouter()


def profile_payload(resolved: ResolvedProfile) -> dict:
    extension_schema = OrganizerProfileOut if resolved.role == "organizer" else SponsorProfileOut
    return {
        "profile": ProfileOut.model_validate(resolved.profile),
        resolved.role: extension_schema.model_validate(resolved.extension),
    }


# ----------------------- GET PROFILE -----------------------
@router.get("/me", response_description="Resolved profile of the current user")
async def get_my_profile(
    response: Response,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    resolved = await resolve_profile(db, context.user.id)
    if resolved is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return ErrorResponseModel(
            "Profile not found", 404, "Choose a role to finish setting up your account",
            next="role-selection", suggested_role=context.user.requested_role,
        )
    return ResponseModel(profile_payload(resolved), "Profile retrieved successfully")


# ----------------------- SETUP PROFILE -----------------------
@router.post("/setup", response_description="Create profile after role selection")
async def setup_profile(
    payload: ProfileSetup,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    resolved = await create_profile(
        db,
        context.user,
        payload.role,
        payload.full_name,
        organizer=payload.organizer,
        sponsor=payload.sponsor,
        avatar_url=payload.avatar_url,
    )
    return ResponseModel(profile_payload(resolved), "Profile created successfully!")


# ----------------------- UPDATE PROFILE -----------------------
@router.put("/me", response_description="Update profile")
async def update_my_profile(
    patch: ProfileUpdate = Body(...),
    resolved: ResolvedProfile = Depends(get_profile),
    db: Session = Depends(get_db),
):
    resolved = await update_profile(db, resolved, patch)
    return ResponseModel(profile_payload(resolved), "Profile updated successfully")


__all__ = ["router"]
