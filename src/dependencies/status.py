from typing import Dict, List

from fastapi import Request


def get_status(request: Request) -> Dict:
    settings = request.app.state.settings
    return {
        "git_commit_hash": settings.vcs_ref or "unknown",
        "state": "OK",
        "version": settings.version or "unknown",
        "message": "",
        "authentication": "enabled" if request.app.state.credentials.enabled else "disabled",
    }


def get_version(request: Request) -> List[str]:
    return [str(request.app.state.settings.version or "unknown")]
