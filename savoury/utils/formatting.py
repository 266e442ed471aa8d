"""Display formatters, also registered as Jinja2 filters."""

from __future__ import annotations

from datetime import date, datetime

GENDER_STYLES = {
    "male": {"label": "Male", "icon": "mars", "color": "#3b82f6"},
    "female": {"label": "Female", "icon": "venus", "color": "#ec4899"},
    "other": {"label": "Other", "icon": "genderless", "color": "#8b5cf6"},
}
_UNSPECIFIED_GENDER = {"label": "Prefer not to say", "icon": "user", "color": "#6b7280"}


def format_category(category: str | None) -> str:
    """``"side_dish"`` -> ``"Side Dish"``."""
    if not category:
        return ""
    return " ".join(word.capitalize() for word in category.replace("-", "_").split("_") if word)


def format_time(minutes: int | float | None) -> str:
    if not minutes or minutes <= 0:
        return ""
    minutes = int(minutes)
    hours, mins = divmod(minutes, 60)
    if not hours:
        return f"{mins} min"
    if not mins:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


def format_date(value: str | datetime | date | None) -> str:
    """ISO timestamp -> ``"January 5, 2025"``; empty string when unparseable."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return ""
    return f"{value:%B} {value.day}, {value.year}"


def format_gender(gender: str | None) -> dict:
    return GENDER_STYLES.get((gender or "").strip().lower(), _UNSPECIFIED_GENDER)


FILTERS = {
    "category": format_category,
    "cook_time": format_time,
    "date": format_date,
    "gender": format_gender,
}
