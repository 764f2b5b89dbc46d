from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventeye.controller.discovery import filter_sponsors
from eventeye.controller.profile_controller import list_sponsors
from eventeye.database import get_db
from eventeye.deps import get_session_context
from eventeye.response_model import ResponseModel

router = APIRouter()


# ----------------------- SPONSOR DIRECTORY -----------------------
@router.get("/sponsors", response_description="Sponsors with their contact name",
            dependencies=[Depends(get_session_context)])
async def get_sponsors(search: Optional[str] = None, industry: Optional[str] = None,
                       db: Session = Depends(get_db)):
    sponsors = await list_sponsors(db)
    industries = list(dict.fromkeys(s.industry for s in sponsors))
    return ResponseModel(
        {"sponsors": filter_sponsors(sponsors, search, industry), "industries": industries},
        "Sponsors retrieved successfully",
    )


__all__ = ["router"]
