"""
Tests for Double Theories
"""

import pytest

from dbltheory.theory import (
    BasicMorType,
    BasicObType,
    CompositeMorType,
    DoubleTheory,
    HomType,
    Modality,
    ModalMorType,
    ModalObType,
    TabulatorObType,
    TheoryKind,
)
from dbltheory.errors import DuplicateId, OperationTypeError, TypeCompositionError, UnboundType
from dbltheory.path import Path
from dbltheory.stdlib import (
    th_category,
    th_category_links,
    th_delayable_signed_category,
    th_monoidal_category,
    th_multicategory,
    th_schema,
    th_signed_category,
)

OBJECT = BasicObType("Object")


class TestBindings:
    def test_create_theory(self):
        th = DoubleTheory("test")
        assert th.name == "test"
        assert th.kind is TheoryKind.DISCRETE
        assert th.is_discrete
        assert th.ob_type_names() == []

    def test_names_resolve(self):
        th = th_schema()
        assert th.ob_type("Entity") == BasicObType("Entity")
        assert th.mor_type("Mapping") == HomType(BasicObType("Entity"))
        assert th.mor_type("Attr") == BasicMorType("Attr")
        assert th.mor_type_names() == ["Mapping", "AttrOp", "Attr"]

    def test_rebinding_is_an_error(self):
        th = th_category()
        with pytest.raises(DuplicateId):
            th.bind_mor_type("Hom", HomType(OBJECT))
        with pytest.raises(DuplicateId):
            th.bind_ob_type("Object", OBJECT)

    def test_unbound(self):
        th = th_category()
        with pytest.raises(UnboundType):
            th.ob_type("Entity")
        with pytest.raises(UnboundType):
            th.mor_type("Attr")
        with pytest.raises(UnboundType):
            th.bind_mor_type("Bad", BasicMorType("Nope"))

    def test_expression_registration(self):
        th = th_category()
        assert th.has_ob_type(OBJECT)
        assert th.has_mor_type(HomType(OBJECT))
        assert not th.has_ob_type(ModalObType(Modality.LIST, OBJECT))
        assert not th.has_ob_type(TabulatorObType(HomType(OBJECT)))
        assert th_monoidal_category().has_ob_type(ModalObType(Modality.LIST, OBJECT))
        assert th_category_links().has_ob_type(TabulatorObType(HomType(OBJECT)))

    def test_nested_names_resolve(self):
        th = th_delayable_signed_category()
        resolved = th.mor_type(CompositeMorType(("Negative", "Slow")))
        assert resolved == th.mor_type("NegativeSlow")
        assert th.normalize_mor_type(resolved) == th.normalize_mor_type(th.mor_type("NegativeSlow"))
        links = th_category_links()
        assert links.ob_type(TabulatorObType("Hom")) == TabulatorObType(HomType(OBJECT))

    def test_mor_type_over_unknown_object_type(self):
        th = th_category()
        with pytest.raises(UnboundType):
            th.add_mor_type("M", BasicObType("Nope"), OBJECT)
        assert not th.has_mor_type("M")
        assert th.category.mor_generators() == []


class TestBoundaries:
    def test_src_tgt_by_name(self):
        th = th_schema()
        assert th.src("Attr") == BasicObType("Entity")
        assert th.tgt("Attr") == BasicObType("AttrType")
        assert th.src("Mapping") == th.tgt("Mapping") == BasicObType("Entity")

    def test_src_tgt_of_expressions(self):
        th = th_delayable_signed_category()
        assert th.src(th.mor_type("NegativeSlow")) == OBJECT
        multi = th_multicategory()
        assert multi.src("Multihom") == ModalObType(Modality.LIST, OBJECT)
        assert multi.tgt("Multihom") == OBJECT
        hom = HomType(OBJECT)
        assert multi.src(ModalMorType(Modality.LIST, hom)) == ModalObType(Modality.LIST, OBJECT)

    def test_tabulator_boundary(self):
        th = th_category_links()
        assert th.src("Link") == OBJECT
        assert th.tgt("Link") == TabulatorObType(HomType(OBJECT))


class TestComposition:
    def test_compose_signs(self):
        th = th_signed_category()
        assert th.compose_types("Negative", "Negative") == HomType(OBJECT)
        assert th.compose_types("Positive", "Negative") == BasicMorType("Negative")
        assert th.compose_types("Positive", "Positive") == HomType(OBJECT)

    def test_compose_mismatch(self):
        th = th_schema()
        with pytest.raises(TypeCompositionError) as info:
            th.compose_types("Attr", "Attr")
        assert info.value.expected == BasicObType("AttrType")
        assert info.value.found == BasicObType("Entity")

    def test_compose_with_units(self):
        th = th_schema()
        assert th.compose_types("Mapping", "Attr") == BasicMorType("Attr")
        assert th.compose_types("Attr", "AttrOp") == BasicMorType("Attr")

    def test_normalize_delays(self):
        th = th_delayable_signed_category()
        slow_neg = CompositeMorType((BasicMorType("Slow"), BasicMorType("Negative")))
        assert th.mor_types_equal(slow_neg, th.mor_type("NegativeSlow"))
        assert th.compose_types("NegativeSlow", "Negative") == BasicMorType("Slow")
        assert th.normalize_mor_type(CompositeMorType((HomType(OBJECT), HomType(OBJECT)))) == HomType(OBJECT)

    def test_path_of(self):
        th = th_signed_category()
        assert th.path_of(HomType(OBJECT)) == Path.identity("Object")
        assert th.path_of(BasicMorType("Negative")) == Path.single("Negative", "Object", "Object")
        assert th_multicategory().path_of(BasicMorType("Multihom")) is None


class TestOperations:
    def test_apply_ob_op(self):
        th = th_monoidal_category()
        assert th.apply_ob_op("tensor", ModalObType(Modality.LIST, OBJECT)) == OBJECT
        assert [op.name for op in th.ob_ops()] == ["tensor"]

    def test_apply_ob_op_wrong_type(self):
        th = th_monoidal_category()
        with pytest.raises(OperationTypeError) as info:
            th.apply_ob_op("tensor", OBJECT)
        assert info.value.expected == ModalObType(Modality.LIST, OBJECT)

    def test_unknown_op(self):
        with pytest.raises(OperationTypeError):
            th_monoidal_category().apply_ob_op("cotensor", OBJECT)
        with pytest.raises(OperationTypeError):
            th_monoidal_category().apply_mor_op("cotensor", HomType(OBJECT))

    def test_apply_mor_op(self):
        th = th_signed_category()
        th.add_mor_op("negate", "Positive", "Negative")
        assert th.apply_mor_op("negate", HomType(OBJECT)) == BasicMorType("Negative")
        with pytest.raises(OperationTypeError):
            th.apply_mor_op("negate", BasicMorType("Negative"))
        with pytest.raises(DuplicateId):
            th.add_mor_op("negate", "Negative", "Positive")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
