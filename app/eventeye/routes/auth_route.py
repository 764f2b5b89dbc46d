from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eventeye.controller.auth_controller import (
    SessionContext, sign_in, sign_in_with_google, sign_out, sign_up,
)
from eventeye.database import get_db
from eventeye.deps import get_registry, get_session_context
from eventeye.response_model import ResponseModel
from eventeye.schema.auth_schema import (
    AuthUserOut, GoogleSignInRequest, SessionOut, SignInRequest, SignUpRequest,
)

router = APIRouter()


def _session_out(context: SessionContext) -> SessionOut:
    return SessionOut(
        access_token=context.access_token,
        expires_at=context.session.expires_at,
        user=AuthUserOut.model_validate(context.user),
    )


# ----------------------- SIGN UP -----------------------
@router.post("/signup", response_description="Create an account")
async def signup(payload: SignUpRequest, db: Session = Depends(get_db)):
    user = await sign_up(db, payload.email, payload.password, payload.full_name, payload.role)
    return ResponseModel(
        AuthUserOut.model_validate(user),
        "Account created successfully! Please sign in to continue.",
    )


# ----------------------- SIGN IN -----------------------
@router.post("/signin", response_description="Open a session")
async def signin(payload: SignInRequest, db: Session = Depends(get_db)):
    context = await sign_in(db, payload.email, payload.password)
    return ResponseModel(_session_out(context), "Signed in successfully!")


# ----------------------- GOOGLE SIGN IN -----------------------
@router.post("/google", response_description="Open a session with a Google ID token")
async def google_signin(payload: GoogleSignInRequest, db: Session = Depends(get_db)):
    context = await sign_in_with_google(db, payload.id_token)
    return ResponseModel(_session_out(context), "Signed in successfully!")


# ----------------------- SIGN OUT -----------------------
@router.post("/signout", response_description="Close the current session")
async def signout(
    request: Request,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    session_id = context.session.id
    await sign_out(db, context)
    get_registry(request).discard(session_id)
    return ResponseModel(None, "Signed out")


# ----------------------- CURRENT USER -----------------------
@router.get("/me", response_description="Current user")
async def me(context: SessionContext = Depends(get_session_context)):
    return ResponseModel(AuthUserOut.model_validate(context.user), "Current user")


__all__ = ["router"]
