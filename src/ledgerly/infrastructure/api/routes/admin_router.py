"""Admin reference data routes."""

from fastapi import APIRouter

from ledgerly.domain.entities.feature import FEATURES
from ledgerly.infrastructure.api.dependencies import AdminUser
from ledgerly.infrastructure.api.schemas import FeatureResponse

router = APIRouter()


@router.get(
    "/features",
    response_model=list[FeatureResponse],
    responses={403: {"description": "Admin access required"}},
)
async def list_features(current_user: AdminUser) -> list[FeatureResponse]:
    """List the nine dashboard features permissions are granted against."""
    return [FeatureResponse(name=feature.name, path=feature.path) for feature in FEATURES]
