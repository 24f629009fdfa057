"""
handlers/profile_handler.py
----------------------------
Endpoints for user profiles.
Profiles are keyed by the identity provider's user id; the client sends it
as `userId`.
"""

from handlers.errors import NotFoundError, ValidationError
from handlers.http import Request, Response, endpoint, json_response
from models.profile import PROFILE_FIELDS
from repositories.profile_repo import ProfileRepository
from schemas.profile import CreateProfileBody, UpdateProfileBody
from security.ownership import require_owned


@endpoint(methods=["POST"], failure="Failed to create profile", missing="User ID and email are required")
def create_profile(request: Request, profiles: ProfileRepository) -> Response:
    """
    POST /createProfile

    Called by the client right after sign-up. Body: userId, email and
    optionally displayName, avatarUrl. Calling it again for the same user
    refreshes those fields instead of failing.
    """
    body = request.parse(CreateProfileBody)

    profile = profiles.ensure(
        body.userId,
        body.email,
        display_name=body.displayName,
        avatar_url=body.avatarUrl,
    )
    return json_response(201, profile.to_dict())


@endpoint(failure="Failed to fetch profile")
def get_profile(request: Request, profiles: ProfileRepository) -> Response:
    """GET /getProfile?userId=ID"""
    user_id = request.param("userId")
    if user_id is None:
        raise ValidationError("User ID is required")

    profile = profiles.get(user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return json_response(200, profile.to_dict())


@endpoint(methods=["PUT"], failure="Failed to update profile")
def update_profile(request: Request, profiles: ProfileRepository) -> Response:
    """
    PUT /updateProfile?userId=ID

    Body: any of email, displayName, avatarUrl, onboardingMetadata.
    onboardingMetadata replaces the stored document rather than merging into it.
    """
    user_id = request.param("userId")
    if user_id is None:
        raise ValidationError("User ID is required")
    fields = request.parse(UpdateProfileBody).model_dump()

    changes = {column: fields[key] for key, column in PROFILE_FIELDS.items()}
    updated = require_owned(profiles.update(user_id, changes), "Profile not found")
    return json_response(200, updated.to_dict())
