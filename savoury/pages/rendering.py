"""Jinja2 template setup and page rendering helpers."""

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from savoury.config import settings
from savoury.layouts.composer import LayoutContext
from savoury.layouts.prefetch import STATE_ELEMENT_ID, HydrationBoundary
from savoury.services import Services
from savoury.utils.formatting import FILTERS

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters.update(FILTERS)
templates.env.globals["app_name"] = settings.app_name
templates.env.globals["state_element_id"] = STATE_ELEMENT_ID

AUTHENTICATED_NAV_ITEMS = [
    {"href": "/new", "label": "Post", "aria_label": "Post a new recipe"},
    {"href": "/saved", "label": "Saved", "aria_label": "View saved recipes"},
    {"href": "/notifications", "label": "Notifications", "aria_label": "View notifications"},
]
templates.env.globals["nav_items"] = AUTHENTICATED_NAV_ITEMS


def get_services(request: Request) -> Services:
    return request.app.state.services


def render_page(
    request: Request,
    name: str,
    *,
    title: str,
    layout: LayoutContext | None = None,
    hydration: HydrationBoundary | None = None,
    status_code: int = 200,
    description: str = "",
    **context,
) -> HTMLResponse:
    """Render a page template.

    ``layout`` is None for the bare account shell; the template extends the
    variant's layout otherwise.
    """
    return templates.TemplateResponse(
        request=request,
        name=name,
        context={
            "title": title,
            "description": description,
            "layout": layout,
            "layout_template": layout.variant.template if layout else "layouts/bare.html",
            "user": layout.user if layout else None,
            "hydration": hydration,
            **context,
        },
        status_code=status_code,
    )
