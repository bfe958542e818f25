"""
Static Files Middleware
Serves files from the configured static directory, falls through otherwise
"""
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote
from sanic import Request
from sanic.response import HTTPResponse, file, text

from sanicmvc.middleware.base_middleware import Middleware


class StaticFilesMiddleware(Middleware):
    """
    Serve GET/HEAD requests whose path names a file under `directory`

    Requests for anything else continue to the routes. Paths are resolved
    and checked against the directory to prevent path traversal.
    """

    def __init__(self, directory: Union[str, Path], cache_control: str = 'public, max-age=3600'):
        self.directory = Path(directory).resolve()
        self.cache_control = cache_control

    async def before_request(self, request: Request) -> Optional[HTTPResponse]:
        if request.method not in ('GET', 'HEAD'):
            return None

        relative = unquote(request.path).lstrip('/')
        if not relative:
            return None

        # Null bytes and over-long names are not files; let the routes answer
        try:
            file_path = (self.directory / relative).resolve()
            if not file_path.is_relative_to(self.directory):
                return text('Forbidden', status=403)
            if not file_path.is_file():
                return None
        except (OSError, ValueError):
            return None

        return await file(file_path, headers={'Cache-Control': self.cache_control})

    def __repr__(self) -> str:
        return f"<StaticFilesMiddleware {self.directory}>"
