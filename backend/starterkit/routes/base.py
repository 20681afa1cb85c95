"""
StarterKit Backend — Route Matching
=====================================

What:  Route class shared by every API router.
How:   Matching ignores case and one trailing slash, so `/api/v1/users/` and
       `/API/V1/Users` reach the same handler as `/api/v1/users`. The request
       itself keeps its original path.
"""

import re
from typing import Any, Tuple

from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Scope


def strip_trailing_slash(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


class LenientAPIRoute(APIRoute):
    """APIRoute matching case-insensitively, with an optional trailing slash."""

    def __init__(self, path: str, endpoint: Any, **kwargs: Any) -> None:
        super().__init__(path, endpoint, **kwargs)
        self.path_regex = re.compile(self.path_regex.pattern, re.IGNORECASE)

    def matches(self, scope: Scope) -> Tuple[Match, Scope]:
        if scope["type"] == "http":
            path = strip_trailing_slash(scope["path"])
            if path != scope["path"]:
                scope = {**scope, "path": path}
        return super().matches(scope)
