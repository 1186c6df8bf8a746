"""Health check endpoint."""

from fastapi import APIRouter, Request

from ..models import utcnow

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Liveness check. Returns 200 OK if the service is running.
    """
    return {
        "success": True,
        "message": "Task Manager API is running",
        "timestamp": utcnow().isoformat(),
        "version": request.app.state.settings.version,
    }
