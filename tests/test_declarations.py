"""
Tests for Declarations
"""

import logging

import pytest

from dbltheory.declarations import (
    MorphismDeclaration,
    ObjectDeclaration,
    apply_declarations,
    model_from_declarations,
)
from dbltheory.model import Model
from dbltheory.errors import DanglingReference, DuplicateId, MissingCodomain
from dbltheory.stdlib import th_schema


@pytest.fixture
def schema():
    return th_schema()


class TestDeclarations:
    def test_model_from_declarations(self, schema):
        model = model_from_declarations(schema, [
            ObjectDeclaration("person", "Entity"),
            ObjectDeclaration("string", "AttrType"),
            MorphismDeclaration("name", "Attr", dom="person", cod="string"),
            MorphismDeclaration("draft", "Mapping", dom="person"),
        ], name="people")
        assert model.name == "people"
        assert model.objects() == ["person", "string"]
        assert model.morphisms() == ["name", "draft"]
        assert model.validate() == [MissingCodomain("draft")]

    def test_strict_raises(self, schema):
        decls = [
            MorphismDeclaration("name", "Attr", dom="person", cod="string"),
            ObjectDeclaration("person", "Entity"),
        ]
        with pytest.raises(DanglingReference):
            model_from_declarations(schema, decls)

    def test_non_strict_skips(self, schema, caplog):
        model = Model(schema)
        decls = [
            ObjectDeclaration("person", "Entity"),
            ObjectDeclaration("person", "Entity"),
            MorphismDeclaration("name", "Attr", dom="person", cod="string"),
        ]
        with caplog.at_level(logging.WARNING, logger="dbltheory.declarations"):
            skipped = apply_declarations(model, decls, strict=False)
        assert [decl for decl, _ in skipped] == decls[1:]
        assert isinstance(skipped[0][1], DuplicateId)
        assert isinstance(skipped[1][1], DanglingReference)
        assert model.objects() == ["person"]
        assert "Skipping declaration" in caplog.text

    def test_not_a_declaration(self, schema):
        with pytest.raises(TypeError):
            apply_declarations(Model(schema), ["person"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
