import base64
import hmac
import logging
from typing import Callable, Tuple

from fastapi.security.utils import get_authorization_scheme_param
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from models.models import CredentialPair

Handler = Callable[[Request], Response]


def get_basic_auth(request: Request) -> Tuple[str, str]:
    """
    Get the username and password from the Authorization header.
    A missing or malformed header is not an error, it just gives empty credentials.
    :param request: The request to read the header from
    :return: A tuple of the username and password
    """
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "basic" or not param:
        return "", ""
    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return "", ""
    username, separator, password = decoded.partition(":")
    if not separator:
        return "", ""
    return username, password


class BasicAuthHandler:
    """
    Checks the username and password before invoking the wrapped handler.
    """

    def __init__(self, credentials: CredentialPair, handler: Handler, realm: str = "metrics"):
        if not credentials.enabled:
            raise ValueError("BasicAuthHandler requires both a username and a password")
        self._username = credentials.username.encode("utf-8")
        self._password = credentials.password.encode("utf-8")
        self.handler = handler
        self.realm = realm

    def handle(self, request: Request) -> Response:
        username, password = get_basic_auth(request)
        # Both comparisons always run so timing does not tell which one failed
        username_ok = hmac.compare_digest(self._username, username.encode("utf-8"))
        password_ok = hmac.compare_digest(self._password, password.encode("utf-8"))
        if not (username_ok & password_ok):
            logging.debug(f"Rejected metrics request from {request.client.host if request.client else 'unknown'}")
            return PlainTextResponse(
                "Invalid username or password",
                status_code=401,
                headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
            )

        return self.handler(request)
