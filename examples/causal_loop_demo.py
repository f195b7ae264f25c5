"""
Demonstration of Models and Motif Search

This script builds a small causal loop diagram as a model of the theory of
signed categories, validates it, and searches it for motifs:
1. Which declarations make up the model, and is it well typed?
2. Where are the negative self-loops?
3. Where does a given chain shape occur?
"""

from dbltheory import Model, MorphismDeclaration, ObjectDeclaration, model_from_declarations, motifs
from dbltheory.stdlib import negative_loops, th_signed_category


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def describe(model):
    for x in model.objects():
        print(f"  object   {x}: {model.ob_type(x)}")
    for m in model.morphisms():
        print(f"  morphism {m}: {model.dom(m)} -> {model.cod(m)} : {model.mor_type(m)}")


def build_model(theory):
    print_section("STEP 1: Build and Validate")

    model = model_from_declarations(theory, [
        ObjectDeclaration("prey", "Object"),
        ObjectDeclaration("predators", "Object"),
        ObjectDeclaration("crowding", "Object"),
        ObjectDeclaration("births", "Object"),
        MorphismDeclaration("feeds", "Positive", dom="prey", cod="predators"),
        MorphismDeclaration("eaten", "Negative", dom="predators", cod="prey"),
        MorphismDeclaration("grows", "Positive", dom="prey", cod="crowding"),
        MorphismDeclaration("limits", "Negative", dom="crowding", cod="prey"),
        MorphismDeclaration("suppresses", "Negative", dom="crowding", cod="births"),
        MorphismDeclaration("starves", "Negative", dom="predators", cod="predators"),
    ], name="ecosystem")
    describe(model)

    errors = model.validate()
    print(f"\n  Validation errors: {len(errors)}")
    return model


def find_self_loops(model):
    print_section("STEP 2: Negative Self-Loops")
    for image in negative_loops(model):
        print(f"  found: objects={image.objects()} morphisms={image.morphisms()}")


def find_chains(model):
    print_section("STEP 3: Positive-then-Negative Chains")
    pattern = Model(model.theory, name="chain")
    for x in ("a", "b", "c"):
        pattern.add_ob(x, "Object")
    pattern.add_mor("up", "a", "b", "Positive")
    pattern.add_mor("down", "b", "c", "Negative")

    images = motifs(pattern, model)
    for image in images:
        print(f"  found: objects={sorted(image.objects())} morphisms={sorted(image.morphisms())}")
    print(f"\n  {len(images)} distinct occurrences")


def main():
    theory = th_signed_category()
    model = build_model(theory)
    find_self_loops(model)
    find_chains(model)


if __name__ == "__main__":
    main()
