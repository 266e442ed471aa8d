"""Tests for recipe form parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from savoury.models.recipe import FoodCategory, RecipeForm, parse_ingredient_line


@pytest.mark.parametrize(
    "line,quantity,unit,name",
    [
        ("2 cups flour", 2.0, "cups", "flour"),
        ("1/2 tsp sea salt", "1/2", "tsp", "sea salt"),
        ("3 eggs", 3.0, None, "eggs"),
        ("salt and pepper", None, None, "salt and pepper"),
    ],
)
def test_parse_ingredient_line(line, quantity, unit, name):
    ing = parse_ingredient_line(line)
    assert (ing.quantity, ing.unit, ing.ingredient_name) == (quantity, unit, name)


def test_blank_ingredient_line():
    assert parse_ingredient_line("   ") is None


def test_from_form():
    form = RecipeForm.from_form(
        {
            "title": "  Tomato Soup ",
            "category": "soup",
            "cook_time_minutes": "30",
            "ingredients": "4 tomatoes\n\n1 onion",
            "instructions": "Chop\n  \nSimmer",
        }
    )
    assert form.title == "Tomato Soup"
    assert form.category is FoodCategory.SOUP
    assert form.cook_time_minutes == 30
    assert form.servings == 1
    assert len(form.ingredients) == 2
    assert [i.value for i in form.instructions] == ["Chop", "Simmer"]


def test_payload_carries_author():
    form = RecipeForm.from_form({"title": "Toast", "category": "breakfast", "ingredients": "bread", "instructions": "Toast it"})
    payload = form.to_payload(7)
    assert payload["user_id"] == 7
    assert payload["category"] == "breakfast"
    assert payload["ingredients"] == [{"quantity": None, "unit": None, "ingredient_name": "bread"}]


@pytest.mark.parametrize(
    "overrides",
    [{"title": "   "}, {"category": "brunch"}, {"ingredients": ""}, {"instructions": ""}, {"servings": "0"}],
)
def test_invalid_forms(overrides):
    base = {"title": "Toast", "category": "breakfast", "ingredients": "bread", "instructions": "Toast it"}
    with pytest.raises(ValidationError):
        RecipeForm.from_form({**base, **overrides})


def test_bare_quantity_line_is_kept():
    assert parse_ingredient_line(" 3 ").ingredient_name == "3"

    form = RecipeForm.from_form(
        {"title": "Toast", "category": "breakfast", "ingredients": "3\n2 cups flour", "instructions": "Toast it"}
    )
    assert [i.ingredient_name for i in form.ingredients] == ["3", "flour"]
