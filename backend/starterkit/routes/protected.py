"""
StarterKit Backend — Protected Route
======================================

What:  GET {apiBase}/protected, an example of an endpoint behind a bearer header.

The check is a placeholder for real authentication: any header starting with
`Bearer ` passes, whatever the token. Nothing is decoded or verified.
"""

from fastapi import APIRouter, Depends

from starterkit.dependencies import bearer_header
from starterkit.routes.base import LenientAPIRoute
from starterkit.schemas.api import ErrorResponse, ProtectedData, iso_timestamp

router = APIRouter(tags=["Protected"], route_class=LenientAPIRoute)


@router.get(
    "/protected",
    response_model=ProtectedData,
    responses={401: {"description": "Missing or malformed bearer header", "model": ErrorResponse}},
    summary="Example protected resource",
)
async def get_protected_data(_auth: str = Depends(bearer_header)) -> ProtectedData:
    return ProtectedData(message="This is protected data", timestamp=iso_timestamp())
