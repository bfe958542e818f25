"""
View Engine
Jinja2 rendering for action views and the default error page
"""
import asyncio
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from sanicmvc.defaults import DEFAULT_VIEW_ENGINE


class ViewEngine:
    """
    Template renderer bound to one views directory

    View names use dot notation, mapped onto sub-directories:
        'error'       -> <view_path>/error.html
        'home.index'  -> <view_path>/home/index.html
    """

    def __init__(self, view_path: Union[str, Path], extension: Optional[str] = None):
        self.view_path = Path(view_path)
        self.extension = (extension or DEFAULT_VIEW_ENGINE).lstrip('.')
        self.environment = Environment(
            loader=FileSystemLoader(str(self.view_path)),
            autoescape=select_autoescape(enabled_extensions=('html', 'htm', 'xml', self.extension)),
            enable_async=False,
        )

    def template_name(self, name: str) -> str:
        if name.endswith(f'.{self.extension}'):
            return name
        return f"{name.replace('.', '/')}.{self.extension}"

    def view_exists(self, name: str) -> bool:
        try:
            self.environment.get_template(self.template_name(name))
        except TemplateNotFound:
            return False
        return True

    async def render(self, name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render the view to an HTML string

        Jinja rendering runs in a worker thread to keep the event loop free.

        Raises:
            jinja2.TemplateNotFound: no template for this view name
        """
        template = self.environment.get_template(self.template_name(name))
        return await asyncio.to_thread(template.render, **(context or {}))

    def __repr__(self) -> str:
        return f"<ViewEngine {self.view_path} *.{self.extension}>"
