import logging
import os
from typing import Optional

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI
from prometheus_client import REGISTRY, CollectorRegistry

from configs.settings import get_settings, Settings
from dependencies.credentials import resolve_credentials
from models.models import CredentialPair
from routes.metrics_routes import create_metrics_router
from routes.unauthenticated_routes import router as unauthenticated_router


def create_app(
    settings: Optional[Settings] = None,
    credentials: Optional[CredentialPair] = None,
    registry: Optional[CollectorRegistry] = None,
) -> FastAPI:
    """
    Create the app with the required dependencies.
    Credentials are resolved here, once, before anything is served.
    :param settings: An instance of Settings
    :param credentials: Already resolved credentials, or None to resolve them from the settings
    :param registry: The prometheus registry to expose, defaults to the global registry
    :return:
         Fastapi app with settings and credentials saved in its state attribute
    :raises: ConfigurationError if the auth file or HTTP_AUTH is configured but unusable
    """
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    if os.environ.get("DOTENV_FILE_LOCATION"):
        load_dotenv(os.environ.get("DOTENV_FILE_LOCATION", ".env"))

    if not settings:
        settings = get_settings()

    if os.environ.get("SENTRY_DSN"):
        sentry_sdk.init(
            dsn=os.environ["SENTRY_DSN"],
            traces_sample_rate=1.0,
            http_proxy=os.environ.get("HTTP_PROXY"),
        )

    if credentials is None:
        credentials = resolve_credentials(settings)

    if registry is None:
        registry = REGISTRY

    app = FastAPI(root_path=settings.root_path)  # type: FastAPI

    app.state.settings = settings
    app.state.credentials = credentials
    app.state.registry = registry

    app.include_router(unauthenticated_router)
    app.include_router(create_metrics_router(settings=settings, credentials=credentials, registry=registry))

    return app
