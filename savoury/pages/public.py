"""Public pages: rendered inside the header + footer layout."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request

from savoury.exceptions import SavouryError
from savoury.layouts.composer import LayoutContext, public_layout
from savoury.pages.rendering import render_page
from savoury.utils.validators import is_valid_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])

FEATURES = [
    {"icon": "📚", "title": "Recipe Library", "description": "Access thousands of tested recipes from around the world"},
    {"icon": "👥", "title": "Community Driven", "description": "Connect with fellow food enthusiasts and share your favorites"},
    {"icon": "⭐", "title": "Smart Features", "description": "Get personalized recommendations based on your taste preferences"},
]


@router.get("/")
async def home(request: Request, layout: LayoutContext = Depends(public_layout)):
    return render_page(
        request,
        "pages/home.html",
        title="Savoury - Unlock your Flavor",
        description="Your Modern Food Recipe Sharing Platform",
        layout=layout,
        features=FEATURES,
    )


@router.get("/about")
async def about(request: Request, layout: LayoutContext = Depends(public_layout)):
    return render_page(request, "pages/about.html", title="About Savoury", layout=layout)


@router.get("/privacy")
async def privacy(request: Request, layout: LayoutContext = Depends(public_layout)):
    return render_page(request, "pages/privacy.html", title="Privacy Policy", layout=layout)


@router.get("/contact")
async def contact(request: Request, layout: LayoutContext = Depends(public_layout)):
    return render_page(request, "pages/contact.html", title="Contact Us", layout=layout, form={})


@router.post("/contact")
async def submit_contact(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    subject: str = Form(""),
    message: str = Form(""),
    layout: LayoutContext = Depends(public_layout),
):
    form = {"name": name, "email": email, "subject": subject, "message": message}
    errors = []
    if not name.strip():
        errors.append("Name is required")
    if not is_valid_email(email):
        errors.append("A valid email address is required")
    if not message.strip():
        errors.append("Message is required")
    if errors:
        return render_page(
            request, "pages/contact.html", title="Contact Us", layout=layout,
            form=form, errors=errors, status_code=422,
        )

    try:
        await request.app.state.mailer.send_contact_message(name, email, subject, message)
    except (SavouryError, OSError) as e:
        logger.error("Contact message from %s could not be sent: %s", email, e)
        return render_page(
            request, "pages/contact.html", title="Contact Us", layout=layout,
            form=form, errors=["We couldn't send your message. Please try again later."],
            status_code=503,
        )
    return render_page(request, "pages/contact.html", title="Contact Us", layout=layout, form={}, sent=True)
