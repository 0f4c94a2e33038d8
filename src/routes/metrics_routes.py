import logging
from typing import Optional

from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, CollectorRegistry, generate_latest
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from configs.settings import Settings
from dependencies.basic_auth import BasicAuthHandler, Handler
from models.models import CredentialPair, ErrorHandling


class MetricsHandler:
    """
    Serves the Prometheus exposition of a registry.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY, error_handling: ErrorHandling = ErrorHandling.HTTP_ERROR):
        self.registry = registry
        self.error_handling = error_handling

    def handle(self, request: Request) -> Response:
        try:
            payload = generate_latest(self.registry)
        except Exception as e:
            if self.error_handling == ErrorHandling.RAISE:
                raise
            logging.exception("Error gathering metrics")
            return PlainTextResponse(f"An error has occurred while serving metrics:\n\n{e}", status_code=500)
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


def build_metrics_handler(credentials: CredentialPair, handler: Handler) -> Handler:
    """
    Put HTTP Basic authentication in front of the handler if both a username and password are configured.
    :param credentials: The resolved credentials
    :param handler: The handler to protect
    :return: The handler to mount on the metrics path
    """
    if not credentials.enabled:
        logging.info("HTTP Basic authentication is disabled.")
        return handler

    logging.info("HTTP Basic authentication is enabled.")
    return BasicAuthHandler(credentials=credentials, handler=handler).handle


def create_metrics_router(settings: Settings, credentials: CredentialPair, registry: Optional[CollectorRegistry] = None) -> APIRouter:
    """
    Create the router that serves the metrics.
    :param settings: An instance of Settings
    :param credentials: The resolved credentials, empty to disable authentication
    :param registry: The registry to expose, defaults to the global prometheus registry
    :return: The metrics router
    """
    metrics = MetricsHandler(registry=registry if registry is not None else REGISTRY, error_handling=settings.error_handling)
    router = APIRouter(tags=["metrics"])
    router.add_route(
        settings.metrics_path,
        build_metrics_handler(credentials, metrics.handle),
        methods=["GET"],
        name="metrics",
        include_in_schema=False,
    )
    return router
