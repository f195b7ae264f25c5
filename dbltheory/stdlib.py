"""
Standard Library Module

Standard double theories, standard small models used as motifs, and the
loop analyses built from them.

Theories:
- th_empty, th_category, th_schema
- th_signed_category, th_delayable_signed_category,
  th_nullable_signed_category, th_category_with_scalars
- th_category_links (tabulator)
- th_monoidal_category, th_multicategory (modal)

Equations in the type categories are written so that, read left to right,
they form confluent terminating rewrite systems.
"""

from typing import List

from .model import Model
from .motifs import motifs
from .path import Path
from .theory import BasicObType, CompositeMorType, DoubleTheory, Modality, ModalObType, TheoryKind


def th_empty() -> DoubleTheory:
    """The empty theory, whose only model is the empty model."""
    return DoubleTheory("empty")


def th_category() -> DoubleTheory:
    """The theory of categories: one object type, morphisms are homs."""
    th = DoubleTheory("category")
    ob = th.add_ob_type("Object")
    th.bind_mor_type("Hom", th.hom_type(ob))
    return th


def th_schema() -> DoubleTheory:
    """The theory of database schemas with attributes."""
    th = DoubleTheory("schema")
    entity = th.add_ob_type("Entity")
    attr_type = th.add_ob_type("AttrType")
    th.bind_mor_type("Mapping", th.hom_type(entity))
    th.bind_mor_type("AttrOp", th.hom_type(attr_type))
    th.add_mor_type("Attr", entity, attr_type)
    return th


def _signed(name: str) -> DoubleTheory:
    th = DoubleTheory(name)
    ob = th.add_ob_type("Object")
    th.bind_mor_type("Positive", th.hom_type(ob))
    th.add_mor_type("Negative", ob, ob)
    cat = th.category
    cat.equate(cat.path(["Negative", "Negative"]), Path.identity("Object"))
    return th


def th_signed_category() -> DoubleTheory:
    """
    The theory of signed categories.

    Free models are signed graphs: regulatory networks and causal loop
    diagrams. Two negative links compose to a positive one.
    """
    return _signed("signed_category")


def th_delayable_signed_category() -> DoubleTheory:
    """The theory of signed categories whose links may be delayed."""
    th = _signed("delayable_signed_category")
    ob = BasicObType("Object")
    th.add_mor_type("Slow", ob, ob)
    cat = th.category
    cat.equate(cat.path(["Slow", "Slow"]), cat.path(["Slow"]))
    cat.equate(cat.path(["Slow", "Negative"]), cat.path(["Negative", "Slow"]))
    th.bind_mor_type("PositiveSlow", th.mor_type("Slow"))
    th.bind_mor_type("NegativeSlow", CompositeMorType((th.mor_type("Negative"), th.mor_type("Slow"))))
    return th


def th_nullable_signed_category() -> DoubleTheory:
    """The theory of signed categories with a zero sign."""
    th = _signed("nullable_signed_category")
    ob = BasicObType("Object")
    th.add_mor_type("Zero", ob, ob)
    cat = th.category
    for lhs in (["Negative", "Zero"], ["Zero", "Negative"], ["Zero", "Zero"]):
        cat.equate(cat.path(lhs), cat.path(["Zero"]))
    return th


def th_category_with_scalars() -> DoubleTheory:
    """Categories sliced over the walking idempotent; homs are the scalars."""
    th = DoubleTheory("category_with_scalars")
    ob = th.add_ob_type("Object")
    th.bind_mor_type("Scalar", th.hom_type(ob))
    th.add_mor_type("Nonscalar", ob, ob)
    cat = th.category
    cat.equate(cat.path(["Nonscalar", "Nonscalar"]), cat.path(["Nonscalar"]))
    return th


def th_category_links() -> DoubleTheory:
    """
    The theory of categories with links.

    A link goes from an object to a morphism; primitive stock and flow
    diagrams are free models.
    """
    th = DoubleTheory("category_links", kind=TheoryKind.TABULATOR)
    ob = th.add_ob_type("Object")
    hom = th.hom_type(ob)
    th.bind_mor_type("Hom", hom)
    th.add_mor_type("Link", ob, th.tabulator(hom))
    return th


def th_monoidal_category() -> DoubleTheory:
    """The theory of monoidal categories: a tensor on lists of objects."""
    th = DoubleTheory("monoidal_category", kind=TheoryKind.MODAL)
    ob = th.add_ob_type("Object")
    th.bind_mor_type("Hom", th.hom_type(ob))
    th.add_ob_op("tensor", ModalObType(Modality.LIST, ob), ob)
    return th


def th_multicategory() -> DoubleTheory:
    """The theory of multicategories: morphisms from lists of objects."""
    th = DoubleTheory("multicategory", kind=TheoryKind.MODAL)
    ob = th.add_ob_type("Object")
    th.add_mor_type("Multihom", ModalObType(Modality.LIST, ob), ob)
    return th


def _loop(th: DoubleTheory, name: str, mor_type: str) -> Model:
    model = Model(th, name=name)
    model.add_ob("x", "Object")
    model.add_mor("loop", "x", "x", mor_type)
    return model


def positive_loop(th: DoubleTheory) -> Model:
    """The positive self-loop in a signed category."""
    return _loop(th, "positive_loop", "Positive")


def negative_loop(th: DoubleTheory) -> Model:
    return _loop(th, "negative_loop", "Negative")


def delayed_positive_loop(th: DoubleTheory) -> Model:
    return _loop(th, "delayed_positive_loop", "PositiveSlow")


def delayed_negative_loop(th: DoubleTheory) -> Model:
    return _loop(th, "delayed_negative_loop", "NegativeSlow")


def positive_feedback(th: DoubleTheory) -> Model:
    """Two objects with positive links both ways."""
    model = Model(th, name="positive_feedback")
    model.add_ob("x", "Object")
    model.add_ob("y", "Object")
    model.add_mor("positive1", "x", "y", "Positive")
    model.add_mor("positive2", "y", "x", "Positive")
    return model


def negative_feedback(th: DoubleTheory) -> Model:
    """Two objects, a positive link one way and a negative link back."""
    model = Model(th, name="negative_feedback")
    model.add_ob("x", "Object")
    model.add_ob("y", "Object")
    model.add_mor("positive", "x", "y", "Positive")
    model.add_mor("negative", "y", "x", "Negative")
    return model


def walking_attr(th: DoubleTheory) -> Model:
    """A schema with one entity, one attribute type and one attribute."""
    model = Model(th, name="walking_attr")
    model.add_ob("entity", "Entity")
    model.add_ob("type", "AttrType")
    model.add_mor("attr", "entity", "type", "Attr")
    return model


def positive_loops(model: Model) -> List[Model]:
    """Positive self-loops in a signed model."""
    return motifs(positive_loop(model.theory), model)


def negative_loops(model: Model) -> List[Model]:
    return motifs(negative_loop(model.theory), model)


def delayed_positive_loops(model: Model) -> List[Model]:
    return motifs(delayed_positive_loop(model.theory), model)


def delayed_negative_loops(model: Model) -> List[Model]:
    return motifs(delayed_negative_loop(model.theory), model)
