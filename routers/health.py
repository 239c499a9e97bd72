from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, object]:
    """Liveness plus which upstream collaborators are configured."""
    state = request.app.state
    return {
        "status": "ok",
        "openai": state.completion_client is not None,
        "gemini": state.gemini_client is not None,
        "benzinga": state.market_data_client is not None,
    }
