# alchemy/models.py
from sqlalchemy import func

from .db import db
from .core.types import Element, Recipe


class ElementRow(db.Model):
    __tablename__ = "elements"

    id         = db.Column(db.Integer, primary_key=True)
    name       = db.Column(db.Text, nullable=False)          # identity key; never renamed
    glyph      = db.Column(db.Text, nullable=False)
    is_base    = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        db.UniqueConstraint("name", name="uq_elements_name"),
    )

    def snapshot(self) -> Element:
        return Element(id=self.id, name=self.name, glyph=self.glyph, is_base=bool(self.is_base))

    def __repr__(self):
        return f"<ElementRow id={self.id} name={self.name!r}>"


class RecipeRow(db.Model):
    __tablename__ = "recipes"

    id         = db.Column(db.Integer, primary_key=True)
    input_low  = db.Column(db.Integer, db.ForeignKey("elements.id"), nullable=False)
    input_high = db.Column(db.Integer, db.ForeignKey("elements.id"), nullable=False)
    result_id  = db.Column(db.Integer, db.ForeignKey("elements.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    result = db.relationship("ElementRow", foreign_keys=[result_id])

    __table_args__ = (
        # at most one recipe per unordered pair; this is what makes concurrent
        # resolves of the same pair converge on a single result
        db.UniqueConstraint("input_low", "input_high", name="uq_recipes_pair"),
        db.CheckConstraint("input_low <= input_high", name="ck_recipes_pair_order"),
    )

    def snapshot(self) -> Recipe:
        return Recipe(input_low=self.input_low, input_high=self.input_high, result_id=self.result_id)

    def __repr__(self):
        return f"<RecipeRow ({self.input_low},{self.input_high})->{self.result_id}>"
