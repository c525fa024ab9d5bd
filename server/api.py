"""FastAPI server exposing the trip capsule planner."""

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from logic.capsule_builder import CAPSULE_VERSION
from services.trip_planner import TripPlanner
from trip_app.logging_config import configure_logging

configure_logging()

planner = TripPlanner()
app = FastAPI(title="Trip Capsule Engine", version="0.1.0")


class CapsulePlanPayload(BaseModel):
    """Request payload for planning a trip capsule.

    Field-level validation happens in the planner so that the service and the
    HTTP surface report the same errors.
    """

    wardrobe: List[Dict[str, Any]] = Field(default_factory=list, description="Raw wardrobe records")
    activities: List[str] = Field(default_factory=list)
    destination: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    weather: List[Dict[str, Any]] | None = Field(None, description="Pre-resolved forecast days")
    location_id: str | None = None
    location_label: str = "Home"
    gender_presentation: str | None = None
    presentation: str | None = None
    prompt: str | None = None
    existing_capsule: Dict[str, Any] | None = None
    mode: str = "AUTO"


class RebuildCheckPayload(BaseModel):
    """Request payload for checking whether a stored capsule is stale."""

    capsule: Dict[str, Any] | None = None
    current_version: int | None = None
    presentation: str = "mixed"
    fingerprint: str | None = None
    mode: str = "AUTO"


def _raise_on_review(response: Dict[str, Any]) -> Dict[str, Any]:
    if response.get("status") == "needs_review":
        raise HTTPException(
            status_code=422,
            detail={"message": response.get("message"), "details": response.get("details", [])},
        )
    return response


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "trip-capsule-engine",
        "environment": planner.config.environment or "local",
        "capsule_version": CAPSULE_VERSION,
    }


@app.post("/capsules/plan")
async def plan_capsule(request: CapsulePlanPayload) -> dict:
    """Build a capsule, or return the stored one when it is still up to date."""

    return _raise_on_review(planner.plan_capsule(**request.model_dump()))


@app.post("/capsules/rebuild-check")
async def rebuild_check(request: RebuildCheckPayload) -> dict:
    """Report whether a stored capsule must be rebuilt."""

    return _raise_on_review(planner.check_rebuild(**request.model_dump()))


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
