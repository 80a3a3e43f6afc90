from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple
from .models import Ingredient, Recipe, new_recipe, parse_ingredient
from .storage import RecipeStore, StorageError, StoreError

logger = logging.getLogger(__name__)


class RecipeBook:
    """
    The in-memory working set of recipes, kept in step with a RecipeStore.

    `open()` loads once at startup; every mutation saves the whole set.
    Recipes can be added and read, not edited or removed.
    """

    def __init__(self, store: RecipeStore):
        self.store = store
        self._recipes: List[Recipe] = []

    def open(self) -> None:
        """Load the working set. An unreadable backend logs an error and starts empty."""
        try:
            self._recipes = self.store.load()
        except StorageError as e:
            logger.error("Could not read recipes, starting empty: %s", e)
            self._recipes = []
            return
        logger.info("Opened recipe book with %d recipe(s)", len(self._recipes))

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return tuple(self._recipes)

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def add_recipe(self, name: str, ingredients: Sequence[Ingredient] = ()) -> Recipe:
        """
        Create a recipe, append it and persist the whole book.

        Raises:
          ParseFailure: the name is empty; nothing is added.
          StoreError: saving failed; the recipe is dropped again so memory
            matches what is persisted.
        """
        recipe = new_recipe(name, ingredients)
        self._recipes.append(recipe)
        try:
            self.store.save(self._recipes)
        except StoreError as e:
            self._recipes.pop()
            logger.error("Could not save recipe %r: %s", recipe.name, e)
            raise
        logger.info("Added recipe %s (%s) with %d ingredient(s)", recipe.id, recipe.name, len(recipe.ingredients))
        return recipe

    def add_recipe_from_text(
        self,
        name: str,
        drafts: Sequence[Tuple[str, str, str, str]],
    ) -> Recipe:
        """Parse every (name, amount, unit, price) draft first; any failure adds nothing."""
        ingredients = [parse_ingredient(*draft) for draft in drafts]
        return self.add_recipe(name, ingredients)
