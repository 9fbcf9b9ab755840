"""Social frame endpoints.

Frame hosts poll and post here directly, so these routes are not behind the
client rate limiter.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from app.api.responses import fetch_failed, ok
from app.core.config import settings
from app.core.errors import ValidationAppError
from app.schemas.envelope import ApiResponse
from app.schemas.frame import FrameInteraction
from app.services.frame_service import DEFAULT_ACTION, FrameService

router = APIRouter(tags=["Frame"])

_frame_service = FrameService(base_url=settings.app.frame_base_url)


@router.get("/frame", response_model=ApiResponse)
async def get_frame(
    action: str = Query(DEFAULT_ACTION, description="Screen to render: home, dashboard, portfolio, alerts, settings"),
) -> JSONResponse:
    try:
        frame = _frame_service.build_frame(action)
    except Exception as exc:
        return fetch_failed("Failed to generate frame data", exc)

    return ok(frame, "Frame data generated successfully")


@router.post("/frame", response_model=ApiResponse)
async def post_frame(payload: FrameInteraction) -> JSONResponse:
    """Handle a frame button press and return the next screen.

    Raises:
        ValidationAppError: 400 envelope when untrustedData or trustedData
            is missing.
    """
    try:
        frame = _frame_service.handle_interaction(payload)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to process frame interaction", exc)

    return ok(frame, "Frame interaction processed")
