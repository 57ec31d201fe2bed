"""Template rendering for wiki pages."""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from plainwiki.core.errors import RenderError
from plainwiki.core.models import Page


class Renderer:
    """Binds a Page to one of the named templates.

    Built once by the application factory and shared by all requests.
    Autoescaping is always on, so page bodies are never emitted as markup.
    """

    TEMPLATE_NAMES = frozenset({"view", "edit"})

    def __init__(self, directory: Path, app_title: str = "PlainWiki"):
        self.directory = directory
        self.app_title = app_title
        env = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=True,
            undefined=StrictUndefined,
        )
        self._templates = Jinja2Templates(env=env)

    def render(self, request: Request, name: str, page: Page) -> HTMLResponse:
        """Render template ``name`` with ``page``.

        Raises RenderError if the template is unknown, missing or fails.
        """
        if name not in self.TEMPLATE_NAMES:
            raise RenderError(f"unknown template: {name!r}")
        try:
            return self._templates.TemplateResponse(
                request,
                f"{name}.html",
                {"page": page, "app_title": self.app_title},
            )
        except TemplateError as exc:
            raise RenderError(f"cannot render {name!r}: {exc}") from exc
