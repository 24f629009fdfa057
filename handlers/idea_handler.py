"""
handlers/idea_handler.py
-------------------------
Endpoints for saved startup ideas: create, list, update, delete.
"""

from handlers.errors import ValidationError
from handlers.http import Request, Response, endpoint, json_response
from models.idea import IDEA_FIELDS, StartupIdea
from repositories.idea_repo import IdeaRepository
from schemas.idea import CreateIdeaBody, UpdateIdeaBody
from security.ownership import require_owned
from utils.logger import get_logger

logger = get_logger(__name__)


@endpoint(methods=["POST"], failure="Failed to create idea")
def create_idea(request: Request, ideas: IdeaRepository) -> Response:
    """
    POST /createIdea

    Body: userId, title, description, category, estimatedRevenue,
    difficulty, timeToLaunch. All required and non-empty.
    """
    body = request.parse(CreateIdeaBody)
    fields = body.model_dump()

    idea = StartupIdea(
        user_id=body.userId,
        **{column: fields[key] for key, column in IDEA_FIELDS.items()},
    )
    saved = ideas.add(idea)
    return json_response(201, saved.to_dict())


@endpoint(failure="Failed to fetch ideas")
def get_ideas(request: Request, ideas: IdeaRepository) -> Response:
    """GET /getIdeas?userId=ID -> the user's ideas, newest first."""
    user_id = request.param("userId")
    if user_id is None:
        raise ValidationError("User ID is required")

    rows = ideas.list_for_user(user_id)
    return json_response(200, [idea.to_dict() for idea in rows])


@endpoint(methods=["PUT"], failure="Failed to update idea", missing="Idea ID and User ID are required")
def update_idea(request: Request, ideas: IdeaRepository) -> Response:
    """
    PUT /updateIdea?id=ID

    Body: userId plus any subset of the idea fields. Omitted or null fields
    keep their stored value.
    """
    idea_id = request.param("id")
    if idea_id is None:
        raise ValidationError("Idea ID and User ID are required")
    body = request.parse(UpdateIdeaBody)
    fields = body.model_dump()

    changes = {column: fields[key] for key, column in IDEA_FIELDS.items()}
    updated = require_owned(
        ideas.update(idea_id, body.userId, changes),
        "Idea not found or unauthorized",
    )
    return json_response(200, updated.to_dict())


@endpoint(methods=["DELETE"], failure="Failed to delete idea")
def delete_idea(request: Request, ideas: IdeaRepository) -> Response:
    """
    DELETE /deleteIdea?id=ID&userId=ID

    Reports success even when nothing matched, so repeating a delete is harmless.
    """
    idea_id = request.param("id")
    user_id = request.param("userId")
    if idea_id is None or user_id is None:
        raise ValidationError("Idea ID and User ID are required")

    if not ideas.delete(idea_id, user_id):
        logger.info(f"Delete of idea #{idea_id} by {user_id} matched no row")
    return json_response(200, {"success": True, "message": "Idea deleted successfully"})
