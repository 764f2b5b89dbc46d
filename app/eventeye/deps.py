from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from eventeye.controller.auth_controller import SessionContext, current_session
from eventeye.controller.profile_controller import ResolvedProfile, require_profile
from eventeye.controller.workspace import SponsorWorkspace, WorkspaceRegistry
from eventeye.core.security import decode_access_token
from eventeye.database import get_db
from eventeye.errors import AuthError

# Clients send "Authorization: Bearer <token>"
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/signin", auto_error=False)


async def get_session_context(request: Request, token: str = Depends(oauth2_scheme),
                              db: Session = Depends(get_db)) -> SessionContext:
    try:
        return await current_session(db, token)
    except AuthError:
        registry = get_registry(request)
        payload = decode_access_token(token) if token else None
        if payload:
            registry.discard(payload.get("jti"))
        registry.sweep()
        raise


async def get_profile(context: SessionContext = Depends(get_session_context),
                      db: Session = Depends(get_db)) -> ResolvedProfile:
    return await require_profile(db, context.user.id)


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


async def get_workspace(
    context: SessionContext = Depends(get_session_context),
    profile: ResolvedProfile = Depends(get_profile),
    registry: WorkspaceRegistry = Depends(get_registry),
    db: Session = Depends(get_db),
) -> SponsorWorkspace:
    workspace = registry.get(context.session.id, profile, context.session.expires_at)
    await workspace.ensure_loaded(db)
    return workspace
