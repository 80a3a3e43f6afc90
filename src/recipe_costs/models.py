from __future__ import annotations
import math
import re
from functools import reduce
from typing import Iterable, Sequence, Tuple
from uuid import uuid4
from pydantic import BaseModel, ConfigDict, Field


UNIT_OPTIONS: Tuple[str, ...] = ("gr", "ml", "tbsp", "tsp", "kg", "L", "oz")

# "-0" is zero, like the price rule
_AMOUNT_RE = re.compile(r"\+?[0-9]+|-0+")
_PRICE_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def new_id() -> str:
    return str(uuid4())


class RecipeError(Exception):
    """Base class for every error raised by recipe_costs."""


class ParseFailure(RecipeError, ValueError):
    def __init__(self, field: str, text: str, reason: str):
        super().__init__(f"{field}: {reason} (got {text!r})")
        self.field = field
        self.text = text
        self.reason = reason


class _Entity(BaseModel):
    # Identity is the id alone; compare model_dump() for structural equality.
    # The id is required so stored records never get a fresh one on load;
    # new ids come from new_id() in the factories below.
    model_config = ConfigDict(frozen=True)

    id: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


class Ingredient(_Entity):
    name: str
    amount: int = Field(..., ge=0)
    unit: str
    price: float = Field(..., ge=0, allow_inf_nan=False)


class Recipe(_Entity):
    name: str = Field(..., min_length=1)
    ingredients: Tuple[Ingredient, ...] = ()

    @property
    def total_price(self) -> float:
        return compute_total(self.ingredients)


def compute_total(ingredients: Iterable[Ingredient]) -> float:
    """Sum ingredient prices left to right, starting from 0.0."""
    return reduce(lambda acc, ing: acc + ing.price, ingredients, 0.0)


def parse_amount(text: str) -> int:
    if not _AMOUNT_RE.fullmatch(text):
        raise ParseFailure("amount", text, "not a non-negative integer")
    return int(text)


def parse_price(text: str) -> float:
    if not _PRICE_RE.fullmatch(text):
        raise ParseFailure("price", text, "not a decimal number")
    value = float(text)
    if not math.isfinite(value):
        raise ParseFailure("price", text, "not a finite number")
    if value < 0:
        raise ParseFailure("price", text, "negative price")
    # "-0" parses to -0.0
    return value + 0.0


def parse_ingredient(name: str, amount_text: str, unit: str, price_text: str) -> Ingredient:
    """
    Build an Ingredient from form text.

    Both numbers are parsed before anything is constructed, so a failure
    leaves nothing half-built. `name` and `unit` are kept verbatim.

    Raises:
      ParseFailure: amount is not a non-negative integer, or price is not
        a finite non-negative decimal.
    """
    amount = parse_amount(amount_text)
    price = parse_price(price_text)
    return Ingredient(id=new_id(), name=name, amount=amount, unit=unit, price=price)


def parse_recipe_name(name: str) -> str:
    if name == "":
        raise ParseFailure("name", name, "recipe name is empty")
    return name


def new_recipe(name: str, ingredients: Sequence[Ingredient] = ()) -> Recipe:
    return Recipe(id=new_id(), name=parse_recipe_name(name), ingredients=tuple(ingredients))


def format_price(value: float, currency: str = "Rp") -> str:
    return f"{currency} {value:.2f}"
