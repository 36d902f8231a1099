"""Health check endpoint."""

from fastapi import APIRouter, Request

from flypad.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, str]:
    """Report liveness and whether the briefing event loop is running."""

    task = getattr(request.app.state, "runtime_task", None)
    runtime = "running" if task is not None and not task.done() else "stopped"
    return {"status": "ok", "env": settings.flypad_env, "runtime": runtime}
