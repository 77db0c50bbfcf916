"""Wire DTOs exchanged with the OAuth2 token endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class LoginToken(BaseModel):
    """Successful password-grant response.

    Attributes:
        access_token: Bearer token for subsequent API calls.
        instance_url: Org-specific base URL to use once logged in.
        id: Identity URL of the logged-in user.
        token_type: Token type, normally "Bearer".
        issued_at: Issue timestamp (milliseconds since epoch, as sent).
        signature: Signature over id and issued_at.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str = Field(min_length=1)
    instance_url: str = Field(min_length=1)
    id: str | None = None
    token_type: str | None = None
    issued_at: str | None = None
    signature: str | None = None


class LoginError(BaseModel):
    """Error payload returned with a 400 from the token endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    error: str
    error_description: str = ""


class RestError(BaseModel):
    """Structured error carried by ProtocolError."""

    model_config = ConfigDict(frozen=True)

    message: str
    error_code: str | None = None
