from __future__ import annotations
import logging
from typing import List, Optional
from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel
from .book import RecipeBook
from .config import DATA_DIR, configure_logging, load_settings
from .models import UNIT_OPTIONS, ParseFailure, Recipe, format_price
from .storage import RecipeStore, SqliteSlot, StoreError

logger = logging.getLogger(__name__)

settings = load_settings()

slot = SqliteSlot(settings.db_url)
book = RecipeBook(RecipeStore(slot))

mcp = FastMCP("recipe-costs")


class IngredientDraft(BaseModel):
    """Ingredient fields exactly as typed into the add-recipe form."""
    name: str
    amount: str
    unit: str = UNIT_OPTIONS[0]
    price: str


class IngredientLine(BaseModel):
    id: str
    name: str
    amount: int
    unit: str
    price: str


class RecipeSummary(BaseModel):
    id: str
    name: str
    total: str


class RecipeDetail(RecipeSummary):
    ingredients: List[IngredientLine] = []


def _summary(recipe: Recipe) -> RecipeSummary:
    return RecipeSummary(
        id=recipe.id,
        name=recipe.name,
        total=format_price(recipe.total_price, settings.currency),
    )


def _detail(recipe: Recipe) -> RecipeDetail:
    lines = [
        IngredientLine(
            id=ing.id,
            name=ing.name,
            amount=ing.amount,
            unit=ing.unit,
            price=format_price(ing.price, settings.currency),
        )
        for ing in recipe.ingredients
    ]
    return RecipeDetail(**_summary(recipe).model_dump(), ingredients=lines)


@mcp.tool()
def recipes_list() -> List[RecipeSummary]:
    """
    List every saved recipe with its total ingredient cost.

    This is a READ-ONLY operation (no state changes).

    Returns:
      RecipeSummary objects in the order the recipes were added. Each has:
      - id (string)
      - name (string)
      - total (string): sum of ingredient prices, two decimals, e.g. "Rp 5.75"

    Notes:
      - Returns an empty list when no recipes have been saved yet.
    """
    return [_summary(r) for r in book.recipes]


@mcp.tool()
def recipes_get(recipe_id: str) -> Optional[RecipeDetail]:
    """
    Fetch one recipe with its ingredient lines.

    This is a READ-ONLY operation (no state changes).

    Args:
      recipe_id: The id returned by recipes_list() or recipes_add().

    Returns:
      - A RecipeDetail with each ingredient's name, amount, unit and price,
        plus the recipe total
      - null (None) if no recipe has that id
    """
    recipe = book.get(recipe_id)
    if recipe is None:
        return None
    return _detail(recipe)


@mcp.tool()
def recipes_add(name: str, ingredients: Optional[List[IngredientDraft]] = None) -> str:
    """
    Create a recipe from its name and ingredient drafts, then save it.

    This is a WRITE operation. Recipes cannot be edited or deleted later.

    Args:
      name: Recipe name (required, must not be empty).
      ingredients: IngredientDraft list, possibly empty. Each has:
        - name: ingredient name, e.g. "Sugar"
        - amount: whole number as text, e.g. "200"
        - unit: free text, usually one of ingredient_units(), e.g. "gr"
        - price: price of this line as text, e.g. "12500" or "3.25"

    Returns:
      The new recipe id, or a message starting with "error:" when nothing
      was saved (empty name, bad amount/price, or storage failure).
    """
    drafts = [(d.name, d.amount, d.unit, d.price) for d in ingredients or []]
    try:
        recipe = book.add_recipe_from_text(name, drafts)
    except ParseFailure as e:
        logger.info("Rejected recipe %r: %s", name, e)
        return f"error: {e}"
    except StoreError as e:
        return f"error: {e}"
    return recipe.id


@mcp.tool()
def ingredient_units() -> List[str]:
    """
    Suggested unit labels for ingredient amounts.

    Units are plain labels; any other text is accepted by recipes_add().
    """
    return list(UNIT_OPTIONS)


def main() -> None:
    configure_logging(settings.log_level)
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    slot.init()
    book.open()
    mcp.run()  # stdio transport


if __name__ == "__main__":
    main()
