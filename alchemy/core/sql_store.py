# alchemy/core/sql_store.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

from ..db import db
from ..errors import DuplicateElement, StoreUnavailable
from ..models import ElementRow, RecipeRow
from .store import ElementStore
from .types import Element, Recipe

logger = logging.getLogger(__name__)


class SqlStore(ElementStore):
    """
    Durable store on the Flask-SQLAlchemy session. Needs an app context.

    Both uniqueness rules are left to the database constraints
    (uq_elements_name, uq_recipes_pair), so they hold across processes too.
    """
    kind = "sql"
    durable = True

    @contextmanager
    def _guard(self, op: str) -> Iterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError) as e:
            db.session.rollback()
            logger.warning("store unavailable during %s: %s", op, e.orig)
            raise StoreUnavailable(f"element store unavailable ({op})") from e

    # -------- elements --------
    def get_element(self, element_id: int) -> Optional[Element]:
        with self._guard("get_element"):
            row = db.session.get(ElementRow, element_id)
            return row.snapshot() if row else None

    def get_element_by_name(self, name: str) -> Optional[Element]:
        with self._guard("get_element_by_name"):
            row = ElementRow.query.filter_by(name=name).first()
            return row.snapshot() if row else None

    def list_elements(self) -> List[Element]:
        with self._guard("list_elements"):
            return [r.snapshot() for r in ElementRow.query.order_by(ElementRow.id.asc()).all()]

    def insert_element(self, name: str, glyph: str, is_base: bool = False) -> Element:
        with self._guard("insert_element"):
            row = ElementRow(name=name, glyph=glyph, is_base=is_base)
            db.session.add(row)
            try:
                db.session.flush()
                element = row.snapshot()
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                if self.get_element_by_name(name) is not None:
                    raise DuplicateElement(name)
                raise
            return element

    # -------- recipes --------
    def get_recipe(self, low: int, high: int) -> Optional[Recipe]:
        with self._guard("get_recipe"):
            row = RecipeRow.query.filter_by(input_low=low, input_high=high).first()
            return row.snapshot() if row else None

    def insert_recipe(self, low: int, high: int, result_id: int) -> bool:
        with self._guard("insert_recipe"):
            db.session.add(RecipeRow(input_low=low, input_high=high, result_id=result_id))
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                if self.get_recipe(low, high) is not None:
                    return False
                raise
            return True

    def list_recipes_by_result(self, result_id: int) -> List[Recipe]:
        with self._guard("list_recipes_by_result"):
            rows = (RecipeRow.query
                    .filter_by(result_id=result_id)
                    .order_by(RecipeRow.id.asc())
                    .all())
            return [r.snapshot() for r in rows]

    def list_recipes(self) -> List[Recipe]:
        with self._guard("list_recipes"):
            return [r.snapshot() for r in RecipeRow.query.order_by(RecipeRow.id.asc()).all()]

    # -------- schema --------
    def create_schema(self) -> None:
        with self._guard("create_schema"):
            db.create_all()
