"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse, ProfileUpsert
from core.config import settings
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileDetailResponse,
    summary="Get your profile",
    responses={
        200: {"description": "The caller's profile, or null if not set up yet"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated account's profile."""
    profile = await service.get_for_user(user.id)
    return ProfileDetailResponse(data=_build_profile_response(profile) if profile else None)


@router.put(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update your profile",
    responses={
        200: {"description": "Profile saved"},
        400: {"model": ErrorResponse, "description": "Invalid username"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Create the profile on first call, update it afterwards.

    Usernames are lowercased; only `a-z`, `0-9` and `-` are allowed (3-30 chars).
    Optional fields omitted from the body keep their stored value; send `null`
    to clear one.
    """
    optional = {
        field: getattr(body, field)
        for field in ("display_name", "avatar", "bio")
        if field in body.model_fields_set
    }
    profile = await service.upsert(user_id=user.id, username=body.username, **optional)
    return ProfileDetailResponse(data=_build_profile_response(profile))


def _build_profile_response(profile: Profile) -> ProfileResponse:
    """Convert domain entity to response schema with the share link."""
    return ProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        username=profile.username,
        display_name=profile.display_name,
        avatar=profile.avatar,
        bio=profile.bio,
        share_url=settings.share_url(profile.username),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
