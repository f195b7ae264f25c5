"""
Tests for Motif Search
"""

import itertools

import pytest

from dbltheory.model import Model
from dbltheory.motifs import MotifFinder, MotifOptions, motifs, variable_order
from dbltheory.errors import UnsupportedTheory
from dbltheory.stdlib import th_category, th_category_links, th_signed_category


@pytest.fixture
def category():
    return th_category()


def chain(th, name="chain"):
    """x -f-> y -g-> z"""
    model = Model(th, name=name)
    for x in ("x", "y", "z"):
        model.add_ob(x, "Object")
    model.add_mor("f", "x", "y", "Hom")
    model.add_mor("g", "y", "z", "Hom")
    return model


def arrow(th):
    """a -p-> b"""
    model = Model(th, name="arrow")
    model.add_ob("a", "Object")
    model.add_ob("b", "Object")
    model.add_mor("p", "a", "b", "Hom")
    return model


def summary(images):
    return [(sorted(im.objects()), sorted(im.morphisms())) for im in images]


class TestVariableOrder:
    def test_hub_first(self, category):
        star = Model(category)
        for x in ("a", "b", "c", "d"):
            star.add_ob(x, "Object")
        for leaf in ("a", "b", "d"):
            star.add_mor(f"c{leaf}", "c", leaf, "Hom")
        order = variable_order(star)
        assert order[0] == ("ob", "c")
        assert len(order) == 7

    def test_morphisms_after_endpoints(self, category):
        order = variable_order(chain(category))
        position = {var: i for i, var in enumerate(order)}
        assert position[("mor", "f")] > max(position[("ob", "x")], position[("ob", "y")])
        assert position[("mor", "g")] > max(position[("ob", "y")], position[("ob", "z")])

    def test_morphisms_without_endpoints_go_first(self, category):
        model = Model(category)
        model.add_ob("x", "Object")
        model.add_mor("free", None, None, "Hom")
        assert variable_order(model) == [("mor", "free"), ("ob", "x")]


class TestMotifFinder:
    def test_find_all(self, category):
        mappings = MotifFinder(arrow(category), chain(category)).monic().find_all()
        assert len(mappings) == 2
        assert {m.apply_mor("p") for m in mappings} == {"f", "g"}
        for mapping in mappings:
            assert mapping.is_model_morphism(arrow(category), chain(category))

    def test_initialize_ob(self, category):
        mappings = (MotifFinder(arrow(category), chain(category))
                    .monic().initialize_ob("a", "y").find_all())
        assert len(mappings) == 1
        assert mappings[0].apply_mor("p") == "g"

    def test_initialize_mor(self, category):
        mappings = MotifFinder(arrow(category), chain(category)).initialize_mor("p", "f").find_all()
        assert [m.ob_map for m in mappings] == [{"a": "x", "b": "y"}]

    def test_injectivity_on_objects(self, category):
        loop = Model(category)
        loop.add_ob("x", "Object")
        loop.add_mor("l", "x", "x", "Hom")
        assert MotifFinder(arrow(category), loop).find_all() != []
        assert MotifFinder(arrow(category), loop).injective_ob().find_all() == []

    def test_injectivity_on_morphisms(self, category):
        parallel = Model(category)
        parallel.add_ob("a", "Object")
        parallel.add_ob("b", "Object")
        parallel.add_mor("p", "a", "b", "Hom")
        parallel.add_mor("q", "a", "b", "Hom")
        target = arrow(category)
        assert len(MotifFinder(parallel, target).injective_ob().find_all()) == 1
        assert MotifFinder(parallel, target).monic().find_all() == []

    def test_iter_mappings_is_lazy(self, category):
        target = Model(category)
        for i in range(6):
            target.add_ob(f"x{i}", "Object")
        pattern = Model(category)
        for x in ("a", "b", "c"):
            pattern.add_ob(x, "Object")
        first = list(itertools.islice(MotifFinder(pattern, target).monic().iter_mappings(), 5))
        assert len(first) == 5
        assert len(MotifFinder(pattern, target).monic().find_all()) == 6 * 5 * 4

    def test_missing_endpoint_must_stay_missing(self, category):
        pattern = Model(category)
        pattern.add_ob("a", "Object")
        pattern.add_mor("p", "a", None, "Hom")
        target = chain(category)
        target.add_mor("h", "z", None, "Hom")
        mappings = MotifFinder(pattern, target).monic().find_all()
        assert [m.mor_map for m in mappings] == [{"p": "h"}]


class TestMotifs:
    def test_arrows_in_a_chain(self, category):
        images = motifs(arrow(category), chain(category))
        assert summary(images) == [(["x", "y"], ["f"]), (["y", "z"], ["g"])]

    def test_contains_every_substructure(self, category):
        target = chain(category)
        target.add_mor("h", "x", "z", "Hom")
        sub = Model(category)
        sub.add_ob("x", "Object")
        sub.add_ob("z", "Object")
        sub.add_mor("h", "x", "z", "Hom")
        images = motifs(sub, target)
        assert any(image.structurally_equal(sub) for image in images)
        assert len(images) == 3

    def test_images_are_deduplicated(self, category):
        pattern = Model(category)
        pattern.add_ob("a", "Object")
        pattern.add_ob("b", "Object")
        target = chain(category)
        images = motifs(pattern, target)
        assert summary(images) == [(["x", "y"], []), (["x", "z"], []), (["y", "z"], [])]
        for first, second in itertools.combinations(images, 2):
            assert not first.structurally_equal(second)

    def test_ordered_smallest_first(self, category):
        pattern = Model(category)
        pattern.add_ob("a", "Object")
        target = chain(category)
        target.add_mor("l", "z", "z", "Hom")
        loop = Model(category)
        loop.add_ob("c", "Object")
        loop.add_mor("m", "c", "c", "Hom")
        # A point has three images, a loop one; both lists are sorted by size and ids.
        assert summary(motifs(pattern, target)) == [(["x"], []), (["y"], []), (["z"], [])]
        assert summary(motifs(loop, target)) == [(["z"], ["l"])]

    def test_order_independent_of_insertion(self, category):
        target = Model(category)
        for x in ("z", "y", "x"):
            target.add_ob(x, "Object")
        target.add_mor("g", "y", "z", "Hom")
        target.add_mor("f", "x", "y", "Hom")
        assert summary(motifs(arrow(category), target)) == summary(motifs(arrow(category), chain(category)))

    def test_empty_pattern_has_one_empty_image(self, category):
        images = motifs(Model(category), chain(category))
        assert len(images) == 1
        assert images[0].is_empty()

    def test_empty_target(self, category):
        assert motifs(arrow(category), Model(category)) == []

    def test_types_respected(self):
        th = th_signed_category()
        target = Model(th)
        target.add_ob("x", "Object")
        target.add_ob("y", "Object")
        target.add_mor("pos", "x", "y", "Positive")
        target.add_mor("neg", "y", "x", "Negative")
        pattern = Model(th)
        pattern.add_ob("a", "Object")
        pattern.add_ob("b", "Object")
        pattern.add_mor("n", "a", "b", "Negative")
        assert summary(motifs(pattern, target)) == [(["x", "y"], ["neg"])]

    def test_non_monic_options(self, category):
        loop = Model(category)
        loop.add_ob("x", "Object")
        loop.add_mor("l", "x", "x", "Hom")
        options = MotifOptions(monic=False, injective_ob=False)
        assert summary(motifs(arrow(category), loop, options)) == [(["x"], ["l"])]
        assert motifs(arrow(category), loop) == []


class TestUnsupported:
    def test_different_theories(self):
        with pytest.raises(UnsupportedTheory):
            motifs(arrow(th_category()), chain(th_category()))

    def test_non_discrete_theory(self):
        th = th_category_links()
        model = Model(th)
        model.add_ob("x", "Object")
        with pytest.raises(UnsupportedTheory):
            motifs(model, model)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
