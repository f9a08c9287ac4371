from datetime import datetime, timezone

from fastapi import APIRouter

from wafir_bridge.dtos.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health():
    """Returns the health status of the bridge service."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
