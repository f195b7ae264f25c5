"""
Path Module

Paths in a graph: formal composites of morphism generators. A path is either
the identity at an object or a non-empty sequence of generators whose
consecutive codomains and domains agree.

Paths record their own endpoints, so two paths can be concatenated without
consulting the category that owns the generators. Whether the generators
really meet end to end is checked by the category (see
``FpCategory.path``); here we trust the endpoints we are given.
"""

from typing import Iterator, Tuple
from dataclasses import dataclass

from .errors import PathMismatch


@dataclass(frozen=True)
class Path:
    """
    A path in the free category on a graph.

    Attributes:
        dom: Object at which the path starts
        cod: Object at which the path ends
        generators: Morphism generators in order of traversal (empty for
            an identity path)
    """
    dom: str
    cod: str
    generators: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.generators and self.dom != self.cod:
            raise PathMismatch(self.dom, self.cod)

    @classmethod
    def identity(cls, ob: str) -> "Path":
        """Identity path at an object."""
        return cls(ob, ob)

    @classmethod
    def single(cls, gen: str, dom: str, cod: str) -> "Path":
        """Path of length one."""
        return cls(dom, cod, (gen,))

    @property
    def is_identity(self) -> bool:
        return not self.generators

    def __len__(self) -> int:
        return len(self.generators)

    def __iter__(self) -> Iterator[str]:
        return iter(self.generators)

    def cons(self, gen: str, dom: str) -> "Path":
        """Prepend a generator ``gen: dom -> self.dom``."""
        return Path(dom, self.cod, (gen,) + self.generators)

    def snoc(self, gen: str, cod: str) -> "Path":
        """Append a generator ``gen: self.cod -> cod``."""
        return Path(self.dom, cod, self.generators + (gen,))

    def concat(self, other: "Path") -> "Path":
        """
        Concatenate two paths (this one first).

        Args:
            other: Path starting where this one ends

        Returns:
            The composite path; identities are units on either side

        Raises:
            PathMismatch: If ``self.cod != other.dom``
        """
        if self.cod != other.dom:
            raise PathMismatch(self.cod, other.dom)
        if other.is_identity:
            return self
        if self.is_identity:
            return other
        return Path(self.dom, other.cod, self.generators + other.generators)

    def __repr__(self) -> str:
        if self.is_identity:
            return f"Id({self.dom})"
        return f"Seq({', '.join(self.generators)})"
