"""
StarterKit Backend — Request Dependencies
===========================================

What:  FastAPI dependencies shared by route handlers.

    read_body       decodes JSON or URL-encoded request bodies into a dict
    bearer_header   enforces the `Authorization: Bearer ...` prefix
"""

import json
import logging
from typing import Any, Dict

from fastapi import Request

from starterkit.exceptions import AuthError, ValidationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body.

    - application/json                   → parsed object
    - application/x-www-form-urlencoded  → form fields (last value wins)
    - anything else, or an empty body    → {}

    Raises:
        ValidationError: body is not valid JSON, or JSON that is not an object.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json" or content_type.endswith("+json"):
        raw = await request.body()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Malformed JSON body on %s: %s", request.url.path, e)
            raise ValidationError(message="Malformed request body") from e
        if not isinstance(data, dict):
            raise ValidationError(message="Malformed request body")
        return data

    if content_type == "application/x-www-form-urlencoded":
        form = await request.form()
        return dict(form.items())

    return {}


async def bearer_header(request: Request) -> str:
    """
    Return the raw Authorization header when it carries a bearer token.

    Only the prefix is checked. The token is neither decoded nor verified.

    Raises:
        AuthError: header missing or not starting with `Bearer `.
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise AuthError()
    return auth_header
