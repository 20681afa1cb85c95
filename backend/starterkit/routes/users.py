"""
StarterKit Backend — Users Route Handlers
===========================================

What:  GET {apiBase}/users (sample list) and POST {apiBase}/users (create).
How:   Decodes the body with `read_body`, delegates to UserService, returns JSON.
Who:   Called by the frontend through ApiService.get_users / create_user.

POST accepts both JSON and URL-encoded bodies:
    curl -X POST -H 'Content-Type: application/json' \\
         -d '{"name": "Ada", "email": "ada@x.com"}' localhost:3000/api/v1/users
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from starterkit.dependencies import read_body
from starterkit.routes.base import LenientAPIRoute
from starterkit.schemas.api import ErrorResponse, User
from starterkit.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"], route_class=LenientAPIRoute)


@router.get(
    "/users",
    response_model=List[User],
    response_model_exclude_none=True,
    summary="List sample users",
)
async def list_users() -> List[User]:
    return user_service.list_users()


@router.post(
    "/users",
    status_code=201,
    response_model=User,
    response_model_exclude_none=True,
    responses={
        201: {"description": "User created", "model": User},
        400: {"description": "Name or email missing", "model": ErrorResponse},
    },
    summary="Create a user",
    description=(
        "Builds a user from `name` and `email`. The user gets a millisecond "
        "timestamp as id and is not stored."
    ),
)
async def create_user(body: Dict[str, Any] = Depends(read_body)) -> User:
    """
    Create a user from the request body.

    Error responses (handled by the global exception handler):
        HTTP 400: `name` or `email` missing (ValidationError)
    """
    return user_service.create_user(body.get("name"), body.get("email"))
