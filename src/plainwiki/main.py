"""PlainWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from plainwiki.config import Settings, settings as default_settings
from plainwiki.core.errors import PersistenceError, RenderError
from plainwiki.core.models import Page
from plainwiki.core.renderer import Renderer
from plainwiki.core.storage import PageStore, Storage
from plainwiki.core.validation import parse_path

logger = logging.getLogger(__name__)

router = APIRouter()


def get_storage(request: Request) -> Storage:
    """Storage built by the application factory."""
    return request.app.state.storage


def get_renderer(request: Request) -> Renderer:
    """Renderer built by the application factory."""
    return request.app.state.renderer


def valid_title(request: Request, title: str) -> str:
    """Validate the full request path and return the page title.

    ``title`` binds the route's path parameter, but the whole path is what
    gets checked. Responds 404 before any handler logic runs if the path
    does not match.
    """
    parsed = parse_path(request.scope["path"])
    if parsed is None:
        logger.debug("Rejected path %r", request.scope["path"])
        raise HTTPException(status_code=404, detail="Not Found")
    return parsed.title


def render_page(
    request: Request, renderer: Renderer, name: str, page: Page
) -> HTMLResponse:
    """Render a page, mapping template failures to HTTP 500."""
    try:
        return renderer.render(request, name, page)
    except RenderError as exc:
        logger.exception("Failed to render %s for page %s", name, page.title)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/view/{title:path}", response_class=HTMLResponse)
async def view_page(
    request: Request,
    title: str = Depends(valid_title),
    storage: Storage = Depends(get_storage),
    renderer: Renderer = Depends(get_renderer),
):
    """View a wiki page."""
    page = await storage.load(title)

    if page is None:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)

    return render_page(request, renderer, "view", page)


@router.get("/edit/{title:path}", response_class=HTMLResponse)
async def edit_page(
    request: Request,
    title: str = Depends(valid_title),
    storage: Storage = Depends(get_storage),
    renderer: Renderer = Depends(get_renderer),
):
    """Edit page form."""
    page = await storage.load(title)

    if page is None:
        # New page
        page = Page(title=title)

    return render_page(request, renderer, "edit", page)


@router.post("/save/{title:path}")
async def save_page(
    title: str = Depends(valid_title),
    body: str = Form(""),
    storage: Storage = Depends(get_storage),
):
    """Save page content and redirect to its view."""
    page = Page(title=title, body=body.encode("utf-8"))
    try:
        await storage.save(page)
    except PersistenceError as exc:
        logger.exception("Failed to save page %s", title)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return RedirectResponse(url=f"/view/{title}", status_code=302)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its storage and renderer."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving pages from %s", settings.data_dir)
        yield

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.storage = PageStore(settings.data_dir)
    app.state.renderer = Renderer(settings.templates_dir, app_title=settings.app_title)
    app.include_router(router)
    return app


def run() -> None:
    """Start the development server."""
    uvicorn.run(
        "plainwiki.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level,
    )


if __name__ == "__main__":
    run()
