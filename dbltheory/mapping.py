"""
Model Mapping Module

Mappings between models of a double theory: a pair of partial functions
sending object ids to object ids and morphism ids to morphism ids. A
mapping is just data; it is a model morphism when it is total and
preserves types and endpoints, which ``validate`` checks.
"""

from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass, field

from .errors import MappingError
from .model import Model


@dataclass
class ModelMapping:
    """
    A mapping from a domain model to a codomain model.

    Attributes:
        ob_map: Object id in the domain -> object id in the codomain
        mor_map: Morphism id in the domain -> morphism id in the codomain
    """
    ob_map: Dict[str, str] = field(default_factory=dict)
    mor_map: Dict[str, str] = field(default_factory=dict)

    def apply_ob(self, x: str) -> Optional[str]:
        return self.ob_map.get(x)

    def apply_mor(self, m: str) -> Optional[str]:
        return self.mor_map.get(m)

    def assign_ob(self, x: str, y: str) -> Optional[str]:
        """Assign an object, returning the previous assignment."""
        previous = self.ob_map.get(x)
        self.ob_map[x] = y
        return previous

    def assign_mor(self, m: str, n: str) -> Optional[str]:
        previous = self.mor_map.get(m)
        self.mor_map[m] = n
        return previous

    def unassign_ob(self, x: str) -> Optional[str]:
        return self.ob_map.pop(x, None)

    def unassign_mor(self, m: str) -> Optional[str]:
        return self.mor_map.pop(m, None)

    def is_injective_objects(self) -> bool:
        return len(set(self.ob_map.values())) == len(self.ob_map)

    def is_injective_morphisms(self) -> bool:
        return len(set(self.mor_map.values())) == len(self.mor_map)

    def _apply_endpoint(self, x: Optional[str]) -> Optional[str]:
        if x is None:
            return None
        return self.ob_map.get(x, self.mor_map.get(x))

    def iter_invalid(self, dom: Model, cod: Model) -> Iterator[MappingError]:
        """
        Iterate over failures of the mapping to be a model morphism.

        Objects are checked first, then morphisms. An element that is not
        mapped, or is mapped outside the codomain, reports only that.
        """
        th = cod.theory
        for x in dom.objects():
            y = self.ob_map.get(x)
            if y is None or not cod.has_ob(y):
                yield MappingError("ob", x)
            elif not th.ob_types_equal(dom.ob_type(x), cod.ob_type(y)):
                yield MappingError("ob_type", x)
        for m in dom.morphisms():
            n = self.mor_map.get(m)
            if n is None or not cod.has_mor(n):
                yield MappingError("mor", m)
                continue
            if self._apply_endpoint(dom.dom(m)) != cod.dom(n):
                yield MappingError("dom", m)
            if self._apply_endpoint(dom.cod(m)) != cod.cod(n):
                yield MappingError("cod", m)
            if not th.mor_types_equal(dom.mor_type(m), cod.mor_type(n)):
                yield MappingError("mor_type", m)

    def validate(self, dom: Model, cod: Model) -> List[MappingError]:
        return list(self.iter_invalid(dom, cod))

    def is_model_morphism(self, dom: Model, cod: Model) -> bool:
        return next(self.iter_invalid(dom, cod), None) is None

    def syntactic_image(self, cod: Model) -> Model:
        """
        The sub-model of ``cod`` made of exactly the elements this mapping hits.

        This is not a closure: morphisms of ``cod`` between objects in the
        image are left out unless something maps to them. For a mapping
        that does not preserve endpoints, the endpoints of hit morphisms are
        brought in so that the image is still a model.
        """
        image = Model(cod.theory, name=cod.name)
        hit_obs = set(self.ob_map.values())
        hit_mors = set(self.mor_map.values())

        def include(id: Optional[str]) -> None:
            if id is None or image.has_ob(id) or image.has_mor(id):
                return
            if cod.has_ob(id):
                image.add_ob(id, cod.ob_type(id))
            else:
                include(cod.dom(id))
                include(cod.cod(id))
                image.add_mor(id, cod.dom(id), cod.cod(id), cod.mor_type(id))

        for x in cod.objects():
            if x in hit_obs:
                include(x)
        for m in cod.morphisms():
            if m in hit_mors:
                include(m)
        return image
