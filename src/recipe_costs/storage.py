from __future__ import annotations
import logging
from typing import Dict, List, Protocol, Sequence
from pydantic import TypeAdapter, ValidationError
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from .models import Recipe, RecipeError

logger = logging.getLogger(__name__)

RECIPES_KEY = "recipes"

_recipes_adapter = TypeAdapter(List[Recipe])


class StoreError(RecipeError):
    pass


class SerializationError(StoreError):
    pass


class DeserializationError(StoreError):
    pass


class StorageError(StoreError):
    pass


class SlotBackend(Protocol):
    """A named byte slot. Reading a key that was never written gives b""."""

    def read(self, key: str) -> bytes: ...

    def write(self, key: str, data: bytes) -> None: ...


class MemorySlot:
    def __init__(self, initial: Dict[str, bytes] | None = None):
        self.slots: Dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> bytes:
        return self.slots.get(key, b"")

    def write(self, key: str, data: bytes) -> None:
        self.slots[key] = bytes(data)


class SqliteSlot:
    def __init__(self, db_url: str):
        self.engine: Engine = create_engine(db_url, future=True)

    def init(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(text("""
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    data BLOB NOT NULL
                )
            """))

    def read(self, key: str) -> bytes:
        with self.engine.connect() as conn:
            row = conn.execute(text("SELECT data FROM slots WHERE key=:key"), {"key": key}).first()
        if not row:
            return b""
        return bytes(row[0])

    def write(self, key: str, data: bytes) -> None:
        # single statement in one transaction: readers see old or new bytes, never a mix
        with self.engine.begin() as conn:
            conn.execute(
                text("INSERT OR REPLACE INTO slots (key, data) VALUES (:key, :data)"),
                {"key": key, "data": bytes(data)},
            )


class RecipeStore:
    def __init__(self, slot: SlotBackend, key: str = RECIPES_KEY):
        self.slot = slot
        self.key = key

    def save(self, recipes: Sequence[Recipe]) -> None:
        """
        Encode the whole recipe sequence and overwrite the slot with it.

        Raises:
          SerializationError: the recipes could not be encoded; the slot is
            left as it was.
          StorageError: the backend refused the write.
        """
        try:
            data = _recipes_adapter.dump_json(list(recipes))
        except (TypeError, ValueError) as e:
            raise SerializationError(f"could not encode recipes: {e}") from e
        try:
            self.slot.write(self.key, data)
        except SQLAlchemyError as e:
            raise StorageError(f"could not write slot {self.key!r}: {e}") from e
        logger.info("Saved %d recipe(s) to slot %r (%d bytes)", len(recipes), self.key, len(data))

    def load(self, strict: bool = False) -> List[Recipe]:
        """
        Decode the recipes held in the slot.

        An empty slot is the first-run state and gives []. Undecodable bytes
        also give [] and a warning, unless `strict` is set, in which case
        DeserializationError is raised.
        """
        try:
            data = self.slot.read(self.key)
        except SQLAlchemyError as e:
            raise StorageError(f"could not read slot {self.key!r}: {e}") from e
        if not data:
            logger.debug("Slot %r is empty", self.key)
            return []
        try:
            recipes = _recipes_adapter.validate_json(data)
        except ValidationError as e:
            if strict:
                raise DeserializationError(f"slot {self.key!r} holds unreadable data: {e}") from e
            logger.warning(
                "Discarding %d unreadable byte(s) in slot %r (%d validation error(s))",
                len(data), self.key, e.error_count(),
            )
            return []
        logger.info("Loaded %d recipe(s) from slot %r", len(recipes), self.key)
        return recipes
