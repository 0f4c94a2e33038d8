import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from models.models import ErrorHandling


class EnvironmentVariableError(Exception):
    """
    Raised when an environment variable is set to an unusable value.
    """

    pass


@dataclass
class Settings:
    """
    A class to hold the settings for the metrics server.
    Read more about these in the README.md file.
    """

    auth_file: str
    # Raw HTTP_AUTH value, user:password
    http_auth: str = field(repr=False)
    error_handling: ErrorHandling
    host: str
    metrics_path: str
    port: int
    root_path: str
    vcs_ref: Optional[str]
    version: Optional[str]


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """
    Get the settings for the metrics server. These are read from environment variables and then cached.
    Nothing is required; with no AUTH_FILE and no HTTP_AUTH the metrics endpoint is served without authentication.
    :return: A Settings object
    """
    port = os.environ.get("PORT", "9104")
    try:
        port = int(port)
    except ValueError:
        raise EnvironmentVariableError(f"PORT should be an integer, got '{port}'")

    error_handling = os.environ.get("METRICS_ERROR_HANDLING", ErrorHandling.HTTP_ERROR.value)
    try:
        error_handling = ErrorHandling(error_handling)
    except ValueError:
        allowed = ", ".join(e.value for e in ErrorHandling)
        raise EnvironmentVariableError(f"METRICS_ERROR_HANDLING should be one of {allowed}, got '{error_handling}'")

    metrics_path = os.environ.get("METRICS_PATH", "/metrics")
    if not metrics_path.startswith("/"):
        raise EnvironmentVariableError(f"METRICS_PATH should start with '/', got '{metrics_path}'")

    return Settings(
        auth_file=os.environ.get("AUTH_FILE", ""),
        http_auth=os.environ.get("HTTP_AUTH", ""),
        error_handling=error_handling,
        host=os.environ.get("HOST", "0.0.0.0"),
        metrics_path=metrics_path,
        port=port,
        root_path=os.environ.get("ROOT_PATH", ""),
        vcs_ref=os.environ.get("GIT_COMMIT_HASH"),
        version=os.environ.get("VERSION"),
    )
