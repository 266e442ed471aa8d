"""Account pages: login, registration, password recovery and the recipe editor.

These render in the bare shell without navigation chrome.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from savoury.auth.sessions import create_session_tokens, delete_session, set_session_cookies
from savoury.exceptions import AuthenticationError, NotFoundError, PageNotFound, ServiceError
from savoury.models.recipe import FoodCategory, RecipeForm
from savoury.pages.rendering import get_services, render_page
from savoury.services import Services
from savoury.utils.validators import validate_password, validate_registration

logger = logging.getLogger(__name__)

router = APIRouter(tags=["account"])

REGISTER_FIELDS = ("firstName", "lastName", "email", "username", "password", "confirmPassword")


def _session(request: Request):
    return request.app.state.session_accessor.get_session(request)


def _login_user(payload) -> dict | None:
    """The backend answers login with the user either wrapped or at top level."""
    if not isinstance(payload, dict):
        return None
    user = payload.get("user") or payload.get("data") or payload
    if isinstance(user, dict) and isinstance(user.get("user_id"), int):
        return user
    return None


# ── Login / logout ──

@router.get("/login")
async def login_page(request: Request, registered: bool = False, reset: bool = False):
    notice = None
    if registered:
        notice = "Your account is ready. Sign in to continue."
    elif reset:
        notice = "Your password was changed. Sign in with the new one."
    return render_page(request, "account/login.html", title="Sign in", identifier="", notice=notice)


@router.post("/login")
async def login(
    request: Request,
    identifier: str = Form(""),
    password: str = Form(""),
    services: Services = Depends(get_services),
):
    if not identifier.strip() or not password:
        return render_page(
            request, "account/login.html", title="Sign in", identifier=identifier,
            error="Enter your email or username and your password.", status_code=422,
        )
    try:
        payload = await services.auth.login(identifier.strip(), password)
    except AuthenticationError:
        return render_page(
            request, "account/login.html", title="Sign in", identifier=identifier,
            error="Invalid credentials.", status_code=401,
        )
    except ServiceError as e:
        return render_page(
            request, "account/login.html", title="Sign in", identifier=identifier,
            error=e.message, status_code=e.status_code or 502,
        )

    user = _login_user(payload)
    if user is None:
        logger.error("Login response did not include a user record")
        return render_page(
            request, "account/login.html", title="Sign in", identifier=identifier,
            error="Login failed. Please try again.", status_code=502,
        )

    tokens = create_session_tokens(user["user_id"], user.get("email") or "", user.get("username") or "")
    response = RedirectResponse("/feed", status_code=303)
    set_session_cookies(response, tokens)
    logger.info("User %s signed in", user["user_id"])
    return response


@router.post("/logout")
async def logout(request: Request, services: Services = Depends(get_services)):
    session = _session(request)
    if session:
        try:
            await services.auth.logout(session.token)
        except ServiceError as e:
            logger.warning("Backend logout failed for user %s: %s", session.user_id, e)
    response = RedirectResponse("/", status_code=303)
    delete_session(response)
    return response


# ── Registration ──

@router.get("/register")
async def register_page(request: Request):
    return render_page(request, "account/register.html", title="Create an account", form={})


@router.post("/register")
async def register(request: Request, services: Services = Depends(get_services)):
    raw = await request.form()
    form = {k: str(raw.get(k, "")) for k in REGISTER_FIELDS}
    errors = validate_registration(form)
    if errors:
        return render_page(
            request, "account/register.html", title="Create an account",
            form=form, errors=errors, status_code=422,
        )
    try:
        await services.auth.send_register_otp(form)
    except ServiceError as e:
        return render_page(
            request, "account/register.html", title="Create an account",
            form=form, errors=[e.message], status_code=e.status_code or 502,
        )
    return render_page(request, "account/verify.html", title="Verify your email", form=form)


@router.post("/register/verify")
async def verify_registration(
    request: Request,
    email: str = Form(""),
    otp: str = Form(""),
    services: Services = Depends(get_services),
):
    raw = await request.form()
    form = {k: str(raw.get(k, "")) for k in ("firstName", "lastName", "email", "username")}
    try:
        await services.auth.verify_register_otp(email, otp.strip())
    except ServiceError as e:
        return render_page(
            request, "account/verify.html", title="Verify your email",
            form=form, error=e.message, status_code=e.status_code or 502,
        )
    return RedirectResponse("/login?registered=true", status_code=303)


@router.post("/register/resend")
async def resend_registration_otp(request: Request, services: Services = Depends(get_services)):
    raw = await request.form()
    form = {k: str(raw.get(k, "")) for k in ("firstName", "lastName", "email", "username")}
    try:
        await services.auth.resend_otp(form)
    except ServiceError as e:
        return render_page(
            request, "account/verify.html", title="Verify your email",
            form=form, error=e.message, status_code=e.status_code or 502,
        )
    return render_page(
        request, "account/verify.html", title="Verify your email",
        form=form, notice="A new code is on its way.",
    )


# ── Password recovery ──

@router.get("/forgot")
async def forgot_page(request: Request):
    return render_page(request, "account/forgot.html", title="Reset your password", step="email", email="")


@router.post("/forgot")
async def forgot_send_otp(request: Request, email: str = Form(""), services: Services = Depends(get_services)):
    try:
        await services.auth.forgot_password_send_otp(email.strip())
    except ServiceError as e:
        return render_page(
            request, "account/forgot.html", title="Reset your password",
            step="email", email=email, error=e.message, status_code=e.status_code or 502,
        )
    return render_page(request, "account/forgot.html", title="Reset your password", step="verify", email=email.strip())


@router.post("/forgot/verify")
async def forgot_verify(
    request: Request,
    email: str = Form(""),
    otp: str = Form(""),
    services: Services = Depends(get_services),
):
    try:
        await services.auth.verify_forgot_password(email, otp.strip())
    except ServiceError as e:
        return render_page(
            request, "account/forgot.html", title="Reset your password",
            step="verify", email=email, error=e.message, status_code=e.status_code or 502,
        )
    return render_page(
        request, "account/forgot.html", title="Reset your password", step="reset", email=email, otp=otp.strip(),
    )


@router.post("/forgot/reset")
async def forgot_reset(
    request: Request,
    email: str = Form(""),
    otp: str = Form(""),
    newPassword: str = Form(""),
    confirmPassword: str = Form(""),
    services: Services = Depends(get_services),
):
    errors = validate_password(newPassword)
    if newPassword != confirmPassword:
        errors.append("Passwords do not match")
    if errors:
        return render_page(
            request, "account/forgot.html", title="Reset your password",
            step="reset", email=email, otp=otp, errors=errors, status_code=422,
        )
    try:
        await services.auth.reset_password(
            {"email": email, "otp": otp, "newPassword": newPassword, "confirmPassword": confirmPassword}
        )
    except ServiceError as e:
        return render_page(
            request, "account/forgot.html", title="Reset your password",
            step="reset", email=email, otp=otp, errors=[e.message], status_code=e.status_code or 502,
        )
    return RedirectResponse("/login?reset=true", status_code=303)


# ── Recipe editor ──

def _editor(request: Request, *, title: str, action: str, form: dict, errors: list | None = None, status_code: int = 200):
    return render_page(
        request, "account/recipe_form.html", title=title, action=action, form=form,
        categories=list(FoodCategory), errors=errors or [], status_code=status_code,
    )


def _form_errors(e: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc']) or 'form'}: {err['msg']}" for err in e.errors()]


@router.get("/new")
async def new_recipe_page(request: Request):
    if _session(request) is None:
        return RedirectResponse("/login", status_code=303)
    return _editor(request, title="Post a new recipe", action="/new", form={})


@router.post("/new")
async def create_recipe(request: Request, services: Services = Depends(get_services)):
    session = _session(request)
    if session is None:
        return RedirectResponse("/login", status_code=303)

    form = {k: str(v) for k, v in (await request.form()).items()}
    try:
        recipe_form = RecipeForm.from_form(form)
    except ValidationError as e:
        return _editor(request, title="Post a new recipe", action="/new", form=form, errors=_form_errors(e), status_code=422)

    created = await services.recipe.create_recipe(recipe_form.to_payload(session.user_id))
    recipe = (created.get("recipe") or created.get("data")) if isinstance(created, dict) else None
    if isinstance(recipe, dict) and recipe.get("recipe_id") is not None:
        return RedirectResponse(f"/recipe/{recipe['recipe_id']}", status_code=303)
    return RedirectResponse("/feed", status_code=303)


def _recipe_to_form(recipe: dict) -> dict:
    ingredients = []
    for item in recipe.get("recipeIngredients") or []:
        parts = [str(item.get("quantity") or ""), item.get("unit") or "", (item.get("ingredient") or {}).get("ingredient_name", "")]
        ingredients.append(" ".join(p for p in parts if p))
    steps = sorted(recipe.get("instructions") or [], key=lambda s: s.get("step_number", 0))
    return {
        "title": recipe.get("title", ""),
        "category": recipe.get("category", ""),
        "description": recipe.get("description") or "",
        "image_url": recipe.get("image_url") or "",
        "prep_time_minutes": recipe.get("prep_time_minutes") or 0,
        "cook_time_minutes": recipe.get("cook_time_minutes") or 0,
        "servings": recipe.get("servings") or 1,
        "ingredients": "\n".join(ingredients),
        "instructions": "\n".join(s.get("step_text", "") for s in steps),
    }


async def _owned_recipe(services: Services, recipe_id: int, user_id: int) -> dict:
    try:
        data = await services.recipe.get_recipe(recipe_id, user_id)
    except NotFoundError:
        raise PageNotFound("Sorry, we couldn't find that recipe.", title="Recipe Not Found")
    recipe = (data.get("recipe") or data.get("data") or data) if isinstance(data, dict) else None
    if not recipe:
        raise PageNotFound("Sorry, we couldn't find that recipe.", title="Recipe Not Found")
    owner = recipe.get("user_id", (recipe.get("user") or {}).get("user_id"))
    if owner is not None and owner != user_id:
        raise PageNotFound("Only the author can edit this recipe.", title="Recipe Not Found")
    return recipe


@router.get("/edit/{recipe_id}")
async def edit_recipe_page(recipe_id: int, request: Request, services: Services = Depends(get_services)):
    session = _session(request)
    if session is None:
        return RedirectResponse("/login", status_code=303)
    recipe = await _owned_recipe(services, recipe_id, session.user_id)
    return _editor(request, title="Edit recipe", action=f"/edit/{recipe_id}", form=_recipe_to_form(recipe))


@router.post("/edit/{recipe_id}")
async def edit_recipe(recipe_id: int, request: Request, services: Services = Depends(get_services)):
    session = _session(request)
    if session is None:
        return RedirectResponse("/login", status_code=303)
    await _owned_recipe(services, recipe_id, session.user_id)

    form = {k: str(v) for k, v in (await request.form()).items()}
    try:
        recipe_form = RecipeForm.from_form(form)
    except ValidationError as e:
        return _editor(
            request, title="Edit recipe", action=f"/edit/{recipe_id}", form=form,
            errors=_form_errors(e), status_code=422,
        )
    await services.recipe.edit_recipe(recipe_id, recipe_form.to_payload(session.user_id))
    return RedirectResponse(f"/recipe/{recipe_id}", status_code=303)
