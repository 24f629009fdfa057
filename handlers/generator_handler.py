"""
handlers/generator_handler.py
------------------------------
POST /generateIdea: ask the AI for startup ideas. Nothing is saved; the
client stores the ideas it likes through /createIdea.
"""

from ai.idea_generator import IdeaGenerator
from handlers.http import Request, Response, endpoint, json_response
from schemas.generator import GenerateIdeaBody
from security.rate_limiter import RateLimiter


@endpoint(methods=["POST"], failure="Failed to generate ideas", missing="interests is required")
def generate_idea(request: Request, generator: IdeaGenerator, limiter: RateLimiter) -> Response:
    """
    Body: interests (non-empty list of strings), optional marketTrends
    (list of strings), optional userPreferences (object).

    The budget is charged to the client address, never to anything the
    body claims.
    """
    body = request.parse(GenerateIdeaBody)

    limiter.hit(request.client or "anonymous")

    ideas = generator.generate(body.model_dump(exclude_none=True))
    return json_response(200, {"ideas": ideas})
