from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class FoodCategory(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    DESSERT = "dessert"
    APPETIZER = "appetizer"
    SNACK = "snack"
    SOUP = "soup"
    BEVERAGE = "beverage"
    SALAD = "salad"
    SIDE_DISH = "side_dish"


class IngredientInput(BaseModel):
    quantity: float | str | None = None
    unit: str | None = None
    ingredient_name: str


class InstructionInput(BaseModel):
    value: str


_QUANTITY_RE = re.compile(r"^\d+([./]\d+)?$")


def parse_ingredient_line(line: str) -> IngredientInput | None:
    """Parse "2 cups flour" / "3 eggs" / "salt" into an ingredient.

    A leading number is the quantity; when a quantity is followed by at least
    two more words the first of them is the unit. Only a blank line yields None.
    """
    parts = line.split()
    if not parts:
        return None
    if not _QUANTITY_RE.match(parts[0]):
        return IngredientInput(ingredient_name=" ".join(parts))
    quantity: float | str = parts[0]
    if "/" not in parts[0]:
        quantity = float(parts[0])
    rest = parts[1:]
    if len(rest) >= 2:
        return IngredientInput(quantity=quantity, unit=rest[0], ingredient_name=" ".join(rest[1:]))
    if rest:
        return IngredientInput(quantity=quantity, ingredient_name=rest[0])
    # A bare number is kept as written
    return IngredientInput(ingredient_name=parts[0])


class RecipeForm(BaseModel):
    """New/edit recipe form, submitted to the backend as JSON."""

    title: str = Field(min_length=1, max_length=200)
    category: FoodCategory
    description: str | None = None
    image_url: str | None = None
    prep_time_minutes: int = Field(default=0, ge=0)
    cook_time_minutes: int = Field(default=0, ge=0)
    servings: int = Field(default=1, ge=1)
    ingredients: list[IngredientInput] = Field(min_length=1)
    instructions: list[InstructionInput] = Field(min_length=1)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title is required")
        return v

    @classmethod
    def from_form(cls, form: dict) -> RecipeForm:
        """Build from flat form fields; ingredients and instructions are one per line."""
        ingredients = [
            ing for ing in (parse_ingredient_line(l) for l in str(form.get("ingredients", "")).splitlines())
            if ing is not None
        ]
        instructions = [
            InstructionInput(value=l.strip())
            for l in str(form.get("instructions", "")).splitlines()
            if l.strip()
        ]
        return cls(
            title=form.get("title", ""),
            category=form.get("category", ""),
            description=form.get("description") or None,
            image_url=form.get("image_url") or None,
            prep_time_minutes=form.get("prep_time_minutes") or 0,
            cook_time_minutes=form.get("cook_time_minutes") or 0,
            servings=form.get("servings") or 1,
            ingredients=ingredients,
            instructions=instructions,
        )

    def to_payload(self, user_id: int) -> dict:
        payload = self.model_dump(mode="json")
        payload["user_id"] = user_id
        return payload
