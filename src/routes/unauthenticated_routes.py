from fastapi import APIRouter, Request

from dependencies.status import get_version, get_status

# Never behind HTTP Basic authentication, so load balancers can probe the exporter
router = APIRouter(
    tags=["status"],
    responses={404: {"description": "Not found"}},
)


@router.get("/status")
@router.get("/")
def status(request: Request):
    return get_status(request)


@router.get("/version")
def version(request: Request):
    return get_version(request)


@router.get("/healthz")
def healthz():
    return {"state": "OK"}
