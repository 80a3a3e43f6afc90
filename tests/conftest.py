import random
from typing import Callable, List

import pytest

from recipe_costs.models import UNIT_OPTIONS, Ingredient, Recipe, new_id
from recipe_costs.storage import MemorySlot, RecipeStore


NAMES = ["Sugar", "Flour", " Butter ", "Telur", "Santan", "Gula Merah", "", "Garam\n"]


def _random_recipes(rng: random.Random, max_recipes: int = 6, max_ingredients: int = 5) -> List[Recipe]:
    recipes = []
    for i in range(rng.randint(0, max_recipes)):
        ingredients = tuple(
            Ingredient(
                id=new_id(),
                name=rng.choice(NAMES),
                amount=rng.randint(0, 5000),
                unit=rng.choice(UNIT_OPTIONS + ("pinch", "")),
                price=round(rng.uniform(0, 100000), rng.randint(0, 4)),
            )
            for _ in range(rng.randint(0, max_ingredients))
        )
        recipes.append(Recipe(id=new_id(), name=f"Recipe {i} {rng.choice(NAMES)}", ingredients=ingredients))
    return recipes


@pytest.fixture
def random_recipes() -> Callable[..., List[Recipe]]:
    return _random_recipes


@pytest.fixture
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture
def store(slot: MemorySlot) -> RecipeStore:
    return RecipeStore(slot)
