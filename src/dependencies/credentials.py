import logging
from typing import Any, Callable

import yaml
from pydantic import ValidationError

from configs.settings import Settings
from models.models import AuthFile, CredentialPair


class ConfigurationError(Exception):
    """
    Raised when a configured credential source can't be used. This is fatal, the server should not start.
    """

    pass


class AuthFileReadError(ConfigurationError):
    pass


class AuthFileParseError(ConfigurationError):
    pass


class HTTPAuthFormatError(ConfigurationError):
    pass


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class AuthFileLoader(yaml.SafeLoader):
    """
    A SafeLoader that keeps every scalar as the text it was written as, except null.
    Passwords like 0123, 1.50 or true must not be turned into numbers or booleans.
    """


AuthFileLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == "tag:yaml.org,2002:null"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_auth_document(contents: str) -> Any:
    return yaml.load(contents, Loader=AuthFileLoader)


class CredentialResolver:
    """
    Resolves the username and password for the metrics endpoint.
    The auth file wins over HTTP_AUTH, and with neither configured the endpoint is open.
    Only one source is ever consulted, they are never merged.
    """

    def __init__(
        self,
        auth_file: str = "",
        http_auth: str = "",
        read_file: Callable[[str], str] = read_text_file,
        parse_document: Callable[[str], Any] = load_auth_document,
    ):
        """
        :param auth_file: Path to a YAML file with server_user and server_password keys
        :param http_auth: The HTTP_AUTH value, formatted as user:password
        :param read_file: Returns the contents of the file at the given path
        :param parse_document: Turns the file contents into a mapping
        """
        self.auth_file = auth_file
        self.http_auth = http_auth
        self.read_file = read_file
        self.parse_document = parse_document

    def resolve(self) -> CredentialPair:
        """
        :return: The credential pair, empty if nothing is configured
        :raises: ConfigurationError if the configured source is unreadable or malformed
        """
        if self.auth_file:
            return self._from_auth_file(self.auth_file)
        if self.http_auth:
            return self._from_http_auth(self.http_auth)
        return CredentialPair()

    def _from_auth_file(self, path: str) -> CredentialPair:
        logging.debug(f"Reading HTTP Basic authentication credentials from {path}")
        try:
            contents = self.read_file(path)
        except (OSError, UnicodeDecodeError) as e:
            raise AuthFileReadError(f"cannot read auth file '{path}': {e}") from e

        try:
            document = self.parse_document(contents)
            auth = AuthFile.model_validate(document if document is not None else {})
        except (yaml.YAMLError, ValidationError) as e:
            raise AuthFileParseError(f"cannot parse auth file '{path}': {e}") from e
        return auth.to_credentials()

    @staticmethod
    def _from_http_auth(value: str) -> CredentialPair:
        username, separator, password = value.partition(":")
        if not separator or not username or not password:
            raise HTTPAuthFormatError("HTTP_AUTH should be formatted as user:password")
        return CredentialPair(username=username, password=password)


def resolve_credentials(settings: Settings) -> CredentialPair:
    """
    Resolve the credentials for the metrics endpoint from the given settings.
    :param settings: An instance of Settings
    :return: The credential pair, empty if nothing is configured
    :raises: ConfigurationError if the configured source is unreadable or malformed
    """
    return CredentialResolver(auth_file=settings.auth_file, http_auth=settings.http_auth).resolve()
