"""Shared API dependencies for caller identity and the ledger service."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from teacup_ledger.core.security import decode_account
from teacup_ledger.core.settings import Settings
from teacup_ledger.services.events import EventLog
from teacup_ledger.services.ledger import LedgerService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()


def get_settings(request: Request) -> Settings:
    """Return the settings the running app was built with."""
    return request.app.state.settings


def get_ledger(request: Request) -> LedgerService:
    """Return the ledger service owned by the running app."""
    return request.app.state.ledger


def get_event_log(request: Request) -> EventLog:
    """Return the app's in-memory event log."""
    return request.app.state.event_log


SettingsDep = Annotated[Settings, Depends(get_settings)]
LedgerDep = Annotated[LedgerService, Depends(get_ledger)]
EventLogDep = Annotated[EventLog, Depends(get_event_log)]


def get_current_account(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    config: SettingsDep,
) -> str:
    """Get the caller's account identifier from the bearer token.

    Raises:
        HTTPException: If the token is invalid or carries no subject
    """
    try:
        return decode_account(credentials.credentials, config=config)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


# Type alias for current account dependency
CurrentAccountDep = Annotated[str, Depends(get_current_account)]
