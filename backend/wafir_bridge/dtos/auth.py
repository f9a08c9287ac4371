"""DTOs for the user OAuth connection flow."""

from typing import Optional

from pydantic import BaseModel


class OAuthState(BaseModel):
    """Payload carried through GitHub in the OAuth ``state`` parameter."""

    installationId: int
    returnUrl: Optional[str] = None


class AuthStatusResponse(BaseModel):
    connected: bool
    installationId: int


class DisconnectResponse(BaseModel):
    success: bool
    installationId: int
