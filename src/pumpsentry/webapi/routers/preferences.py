"""User preference endpoints."""

from fastapi import APIRouter, Depends, Request

from ...config.logging import get_logger
from ...config.preferences import UserPreferences, save_preferences
from ...exceptions import ConfigurationError
from ..dependencies import get_runtime
from ..models.responses import SuccessResponse
from ..runtime import MarketRuntime

logger = get_logger(__name__)

router = APIRouter(prefix="/preferences")


@router.get(
    "",
    response_model=SuccessResponse[UserPreferences],
    summary="Get Preferences",
)
async def get_preferences(request: Request, runtime: MarketRuntime = Depends(get_runtime)):
    return SuccessResponse[UserPreferences](
        data=runtime.preferences,
        request_id=getattr(request.state, "request_id", None),
    )


@router.put(
    "",
    response_model=SuccessResponse[UserPreferences],
    summary="Update Preferences",
    description="Replace and persist the user preferences",
)
async def update_preferences(
    body: UserPreferences,
    request: Request,
    runtime: MarketRuntime = Depends(get_runtime),
):
    request_id = getattr(request.state, "request_id", None)
    path = runtime.settings.preferences_path

    try:
        save_preferences(body, path)
    except OSError as e:
        raise ConfigurationError("preferences_path", str(e), request_id=request_id)

    runtime.apply_preferences(body)
    logger.info("Preferences updated", request_id=request_id)

    return SuccessResponse[UserPreferences](
        data=body,
        message="Preferences saved",
        request_id=request_id,
    )
