"""Session endpoints - establish, inspect and tear down the session."""

from fastapi import APIRouter, Request, Response

from issueboard.api.dependencies import SessionStoreDep, SettingsDep
from issueboard.api.models import APIResponse, SessionCreate, SessionStatusResponse
from issueboard.session import LocalSessionStore, SessionStore, SessionUpdate

router = APIRouter(prefix="/session", tags=["session"])


def _status(request: Request, store: SessionStore, mode: str) -> SessionStatusResponse:
    session = store.read(request)
    if session is not None:
        return SessionStatusResponse(
            has_session=True,
            mode=mode,
            owner=session.owner,
            repo=session.repo,
            display_name=session.display_name,
        )
    if isinstance(store, LocalSessionStore):
        # Remembered owner/repo survive logout in client-held mode
        return SessionStatusResponse(has_session=False, mode=mode, **store.preferences())
    return SessionStatusResponse(has_session=False, mode=mode)


@router.get("", response_model=APIResponse[SessionStatusResponse])
def get_session(
    request: Request, store: SessionStoreDep, settings: SettingsDep
) -> APIResponse[SessionStatusResponse]:
    """Report whether a session is active. The token is never returned."""
    return APIResponse(data=_status(request, store, settings.session_mode.value))


@router.post("", response_model=APIResponse[SessionStatusResponse])
def create_session(
    payload: SessionCreate,
    request: Request,
    response: Response,
    store: SessionStoreDep,
    settings: SettingsDep,
) -> APIResponse[SessionStatusResponse]:
    """Store token/owner/repo (and display name) for later requests."""
    update = SessionUpdate(
        token=payload.token,
        owner=payload.owner,
        repo=payload.repo,
        display_name=payload.name,
    )
    store.write(response, update)

    if isinstance(store, LocalSessionStore):
        status = _status(request, store, settings.session_mode.value)
    else:
        # Cookies only reach the server on the next request
        complete = bool(payload.token and payload.owner and payload.repo)
        status = SessionStatusResponse(
            has_session=complete,
            mode=settings.session_mode.value,
            owner=payload.owner,
            repo=payload.repo,
        )
    return APIResponse(data=status)


@router.delete("", response_model=APIResponse[SessionStatusResponse])
def delete_session(
    request: Request, response: Response, store: SessionStoreDep, settings: SettingsDep
) -> APIResponse[SessionStatusResponse]:
    """Log out."""
    store.clear(response)
    if isinstance(store, LocalSessionStore):
        return APIResponse(data=_status(request, store, settings.session_mode.value))
    return APIResponse(
        data=SessionStatusResponse(has_session=False, mode=settings.session_mode.value)
    )
