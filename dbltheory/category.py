"""
Category Module

Finitely presented categories: object generators, morphism generators with
a domain and codomain, and equations between paths.

Generators live in an arena. Each one is registered once, keeps its
insertion index for the life of the category, and is never removed, so
iteration order and the total order on generators are stable.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from .constants import MAX_REWRITE_STEPS
from .errors import DanglingReference, DuplicateId, PathMismatch, RewriteLimitExceeded
from .path import Path


@dataclass
class FpCategory:
    """
    A finitely presented category.

    Equations are oriented left to right and used as rewrite rules by
    ``normalize``. Deciding equality this way is complete only for
    confluent, terminating rule sets; for anything else two paths with
    different normal forms may still be equal in the presented category.

    Attributes:
        name: Name of the category
    """
    name: str = ""
    _arena: List[str] = field(default_factory=list, repr=False)
    _index: Dict[str, int] = field(default_factory=dict, repr=False)
    _obs: List[str] = field(default_factory=list, repr=False)
    _mors: List[str] = field(default_factory=list, repr=False)
    _dom: Dict[str, str] = field(default_factory=dict, repr=False)
    _cod: Dict[str, str] = field(default_factory=dict, repr=False)
    _equations: List[Tuple[Path, Path]] = field(default_factory=list, repr=False)

    def _register(self, gen: str) -> None:
        if gen in self._index:
            raise DuplicateId(gen, "generator")
        self._index[gen] = len(self._arena)
        self._arena.append(gen)

    def add_ob_generator(self, ob: str) -> None:
        """Add an object generator."""
        self._register(ob)
        self._obs.append(ob)

    def add_mor_generator(self, mor: str, dom: str, cod: str) -> None:
        """
        Add a morphism generator ``mor: dom -> cod``.

        Raises:
            DuplicateId: If the name is already a generator
            DanglingReference: If ``dom`` or ``cod`` is not an object generator
        """
        for ob in (dom, cod):
            if not self.has_ob(ob):
                raise DanglingReference(ob, mor)
        self._register(mor)
        self._mors.append(mor)
        self._dom[mor] = dom
        self._cod[mor] = cod

    def has_ob(self, ob: str) -> bool:
        return ob in self._index and ob not in self._dom

    def has_mor(self, mor: str) -> bool:
        return mor in self._dom

    def dom(self, mor: str) -> str:
        return self._dom[mor]

    def cod(self, mor: str) -> str:
        return self._cod[mor]

    def ob_generators(self) -> List[str]:
        return list(self._obs)

    def mor_generators(self) -> List[str]:
        return list(self._mors)

    def index_of(self, gen: str) -> int:
        """Stable position of a generator in the arena."""
        return self._index[gen]

    def path(self, gens: Sequence[str], ob: Optional[str] = None) -> Path:
        """
        Build a path from a sequence of morphism generators.

        Args:
            gens: Generators in order of traversal
            ob: Object for the identity path, required when ``gens`` is empty

        Raises:
            DanglingReference: If a generator is unknown
            PathMismatch: If consecutive generators do not meet
        """
        if not gens:
            if ob is None or not self.has_ob(ob):
                raise DanglingReference(str(ob))
            return Path.identity(ob)
        result = Path.identity(self._checked_dom(gens[0]))
        for gen in gens:
            result = self.snoc(result, gen)
        return result

    def _checked_dom(self, gen: str) -> str:
        if not self.has_mor(gen):
            raise DanglingReference(gen)
        return self._dom[gen]

    def cons(self, gen: str, path: Path) -> Path:
        """Prepend a generator, checking that it ends where the path starts."""
        dom = self._checked_dom(gen)
        if self._cod[gen] != path.dom:
            raise PathMismatch(self._cod[gen], path.dom)
        return path.cons(gen, dom)

    def snoc(self, path: Path, gen: str) -> Path:
        """Append a generator, checking that it starts where the path ends."""
        dom = self._checked_dom(gen)
        if path.cod != dom:
            raise PathMismatch(path.cod, dom)
        return path.snoc(gen, self._cod[gen])

    def concat(self, p: Path, q: Path) -> Path:
        """
        Concatenate two paths, checking both against this category.

        Raises:
            DanglingReference: If either path uses an unknown object or generator
            PathMismatch: If a path is ill formed or ``p`` does not end where ``q`` starts
        """
        self._check_path(p)
        self._check_path(q)
        return p.concat(q)

    def _check_path(self, path: Path) -> None:
        if path.is_identity:
            if not self.has_ob(path.dom):
                raise DanglingReference(path.dom)
            return
        current = path.dom
        for gen in path:
            dom = self._checked_dom(gen)
            if dom != current:
                raise PathMismatch(current, dom)
            current = self._cod[gen]
        if current != path.cod:
            raise PathMismatch(current, path.cod)

    def has_path(self, path: Path) -> bool:
        """Is the path well formed over this category's generators?"""
        if path.is_identity:
            return self.has_ob(path.dom)
        current = path.dom
        for gen in path:
            if not self.has_mor(gen) or self._dom[gen] != current:
                return False
            current = self._cod[gen]
        return current == path.cod

    def equate(self, lhs: Path, rhs: Path) -> None:
        """
        Add the equation ``lhs == rhs``, used as the rewrite rule ``lhs -> rhs``.

        Raises:
            PathMismatch: If the two sides have different endpoints
        """
        if lhs.dom != rhs.dom:
            raise PathMismatch(lhs.dom, rhs.dom)
        if lhs.cod != rhs.cod:
            raise PathMismatch(lhs.cod, rhs.cod)
        self._equations.append((lhs, rhs))

    def equations(self) -> List[Tuple[Path, Path]]:
        return list(self._equations)

    def is_free(self) -> bool:
        return not self._equations

    def normalize(self, path: Path, max_steps: int = MAX_REWRITE_STEPS) -> Path:
        """
        Rewrite a path with the equations until none applies.

        At each step the leftmost match of the first applicable rule is
        replaced. Rules whose left side is an identity never fire.

        Raises:
            RewriteLimitExceeded: If more than ``max_steps`` rewrites happen
        """
        rules = [(lhs.generators, rhs.generators) for lhs, rhs in self._equations if lhs.generators]
        gens = path.generators
        for _ in range(max_steps):
            rewritten = _rewrite_once(gens, rules)
            if rewritten is None:
                return Path(path.dom, path.cod, gens)
            gens = rewritten
        if _rewrite_once(gens, rules) is None:
            return Path(path.dom, path.cod, gens)
        raise RewriteLimitExceeded(max_steps)

    def morphisms_are_equal(self, p: Path, q: Path) -> bool:
        if (p.dom, p.cod) != (q.dom, q.cod):
            return False
        return p == q or self.normalize(p) == self.normalize(q)


def _rewrite_once(gens: Tuple[str, ...],
                  rules: Iterable[Tuple[Tuple[str, ...], Tuple[str, ...]]]) -> Optional[Tuple[str, ...]]:
    for i in range(len(gens)):
        for lhs, rhs in rules:
            if gens[i:i + len(lhs)] == lhs:
                return gens[:i] + rhs + gens[i + len(lhs):]
    return None
