from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class ErrorHandling(str, Enum):
    HTTP_ERROR = "http_error"  # Log the failure and answer with a 500
    RAISE = "raise"  # Let the exception reach the server


class CredentialPair(BaseModel):
    """
    The username and password expected on the metrics endpoint.
    Both empty means no authentication is required.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.username) and bool(self.password)


class AuthFile(BaseModel):
    """
    Contents of the YAML auth file. Unknown keys are ignored and missing keys are empty.
    """

    model_config = ConfigDict(extra="ignore")

    server_user: str = ""
    server_password: str = ""

    @field_validator("server_user", "server_password", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        # `server_user:` with no value loads as None
        return "" if value is None else value

    def to_credentials(self) -> CredentialPair:
        return CredentialPair(username=self.server_user, password=self.server_password)
