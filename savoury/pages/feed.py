"""Member pages rendered inside the header-only feed layout.

Each page prefetches the data for its interactive section into a query
snapshot and renders from the hydration boundary built on that snapshot.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from savoury.exceptions import PageNotFound, ServiceError
from savoury.layouts.composer import LayoutContext, feed_layout
from savoury.layouts.prefetch import HydrationBoundary, QueryClient, prefetch
from savoury.pages.rendering import get_services, render_page
from savoury.services import Services

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])

USER_NOT_FOUND = "Sorry, we couldn't find the user you're looking for."


def _items(payload, *keys: str) -> list:
    """Pull the list out of a backend payload that may or may not be wrapped."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def _unwrap_recipe(payload) -> dict | None:
    if not isinstance(payload, dict):
        return None
    recipe = payload.get("data") or payload.get("recipe") or payload
    return recipe or None


def _login_redirect() -> RedirectResponse:
    return RedirectResponse("/login", status_code=303)


# ── Feed ──

@router.get("/feed")
async def feed(
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    hydration = HydrationBoundary(await prefetch("feed", services.feed.fetch_feed))
    recipes = _items(hydration.get_query_data("feed"), "recipes", "feed", "data", "items")
    return render_page(
        request,
        "pages/feed.html",
        title="Your Feed",
        description="Stay updated with the latest recipes from your favorite creators.",
        layout=layout,
        hydration=hydration,
        recipes=recipes,
    )


# ── Notifications ──

@router.get("/notifications")
async def notifications(
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    key = ("notifications", 1)
    try:
        snapshot = await prefetch(key, lambda: services.user.fetch_notifications(page=1, limit=10))
    except ServiceError as e:
        logger.warning("Notifications unavailable: %s", e)
        raise PageNotFound("We couldn't load your notifications.", title="Notifications Not Found")

    hydration = HydrationBoundary(snapshot)
    return render_page(
        request,
        "pages/notifications.html",
        title="Notifications",
        description="Manage your notifications",
        layout=layout,
        hydration=hydration,
        notifications=_items(hydration.get_query_data(key), "notifications", "data", "items"),
    )


@router.post("/notifications/{notification_id}/read")
async def mark_notification_read(notification_id: int, services: Services = Depends(get_services)):
    await services.user.mark_notification_read(notification_id)
    return RedirectResponse("/notifications", status_code=303)


# ── Profiles ──

@router.get("/profile/{user_id}")
async def profile(
    user_id: int,
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    key = ("profile", user_id)
    try:
        snapshot = await prefetch(key, lambda: services.user.fetch_user_profile(user_id))
    except ServiceError as e:
        logger.error("Failed to prefetch user profile %s: %s", user_id, e)
        raise PageNotFound(USER_NOT_FOUND, title="User Not Found")

    hydration = HydrationBoundary(snapshot)
    data = hydration.get_query_data(key)
    profile_user = data.get("user") if isinstance(data, dict) else None
    if not isinstance(profile_user, dict) or not profile_user:
        raise PageNotFound(USER_NOT_FOUND, title="User Not Found")
    return render_page(
        request,
        "pages/profile.html",
        title=f"{profile_user.get('fullname', '')} | Savoury",
        description=f"View {profile_user.get('fullname', '')}'s recipes and cooking profile on Savoury",
        layout=layout,
        hydration=hydration,
        profile=profile_user,
        recipes=profile_user.get("recipes") or [],
    )


@router.get("/user/{username}")
async def user_profile(
    username: str,
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    if layout.user is None:
        return _login_redirect()

    key = ("profile", username)
    hydration = HydrationBoundary(await prefetch(key, lambda: services.user.fetch_user_profile(username)))
    data = hydration.get_query_data(key)
    profile_user = data.get("user") if isinstance(data, dict) else None
    if not isinstance(profile_user, dict) or not profile_user:
        raise PageNotFound(USER_NOT_FOUND, title="User Not Found")
    return render_page(
        request,
        "pages/profile.html",
        title=profile_user.get("fullname", username),
        description=f"View {profile_user.get('fullname', username)}'s recipes and cooking profile on Savoury",
        layout=layout,
        hydration=hydration,
        profile=profile_user,
        recipes=profile_user.get("recipes") or [],
        is_own_profile=layout.user.username == profile_user.get("username"),
    )


# ── Recipes ──

@router.get("/recipe/{recipe_id}")
async def recipe(
    recipe_id: int,
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    user_id = int(layout.user.id) if layout.user else None
    key = ("recipe", recipe_id)
    client = QueryClient()
    try:
        data = await client.fetch_query(key, lambda: services.recipe.get_recipe(recipe_id, user_id))
    except ServiceError as e:
        logger.warning("Recipe %s unavailable: %s", recipe_id, e)
        raise PageNotFound("Sorry, we couldn't find that recipe.", title="Recipe Not Found")
    recipe_data = _unwrap_recipe(data)
    if not recipe_data:
        raise PageNotFound("Sorry, we couldn't find that recipe.", title="Recipe Not Found")

    return render_page(
        request,
        "pages/recipe.html",
        title=f"{recipe_data.get('title', 'Recipe')} | Savoury",
        description=recipe_data.get("description") or "",
        layout=layout,
        hydration=HydrationBoundary(client.dehydrate()),
        recipe=recipe_data,
    )


@router.post("/recipe/{recipe_id}/bookmark")
async def toggle_bookmark(
    recipe_id: int,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    if layout.user is None:
        return _login_redirect()
    await services.recipe.toggle_bookmark(recipe_id, int(layout.user.id))
    return RedirectResponse(f"/recipe/{recipe_id}", status_code=303)


@router.post("/recipe/{recipe_id}/like")
async def toggle_like(
    recipe_id: int,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    if layout.user is None:
        return _login_redirect()
    await services.recipe.toggle_like(recipe_id, int(layout.user.id))
    return RedirectResponse(f"/recipe/{recipe_id}", status_code=303)


@router.post("/recipe/{recipe_id}/comments")
async def add_comment(
    recipe_id: int,
    comment_text: str = Form(""),
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    if layout.user is None:
        return _login_redirect()
    if comment_text.strip():
        await services.recipe.add_comment(recipe_id, int(layout.user.id), comment_text.strip())
    return RedirectResponse(f"/recipe/{recipe_id}#comments", status_code=303)


# ── Saved ──

@router.get("/saved")
async def saved(
    request: Request,
    layout: LayoutContext = Depends(feed_layout),
    services: Services = Depends(get_services),
):
    if layout.user is None:
        return _login_redirect()

    user_id = int(layout.user.id)
    key = ("saved", user_id)
    hydration = HydrationBoundary(await prefetch(key, lambda: services.user.get_saved_recipe_posts(user_id)))
    bookmarks = _items(hydration.get_query_data(key), "bookmark", "bookmarks", "data")
    return render_page(
        request,
        "pages/saved.html",
        title="Your Saved Recipe Posts",
        description="Your saved recipe posts",
        layout=layout,
        hydration=hydration,
        bookmarks=bookmarks,
    )


# ── Search ──

@router.get("/search")
async def search(
    request: Request,
    q: str = "",
    layout: LayoutContext = Depends(feed_layout),
):
    query = q.strip()
    results, total, hydration = [], 0, None
    if query:
        key = ("search", query)
        search_client = request.app.state.search
        hydration = HydrationBoundary(await prefetch(key, lambda: search_client.search_recipes(query)))
        data = hydration.get_query_data(key)
        results, total = data["results"], data["total"]
    return render_page(
        request,
        "pages/search.html",
        title="Search",
        description="Search results here...",
        layout=layout,
        hydration=hydration,
        query=query,
        results=results,
        total=total,
    )
