"""
Motif Search Module

Finds every embedding of a small pattern model (the motif) into a target
model of the same discrete double theory, and reports the distinct
sub-models of the target that the embeddings hit.

The search is a backtracking constraint search. Variables are the elements
of the pattern, ordered most constrained first: objects by descending
degree, each morphism as soon as its endpoints have been placed. Candidate
values are the target elements of the same type, computed once up front.
"""

import logging
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple
from dataclasses import dataclass

import numpy as np

from .constants import DEFAULT_INJECTIVE_OB, DEFAULT_MONIC
from .errors import UnsupportedTheory
from .mapping import ModelMapping
from .model import Model

logger = logging.getLogger(__name__)


@dataclass
class MotifOptions:
    """
    Settings for a motif query.

    Attributes:
        monic: Require injectivity on objects and on morphisms
        injective_ob: Require injectivity on objects only (ignored when monic)
    """
    monic: bool = DEFAULT_MONIC
    injective_ob: bool = DEFAULT_INJECTIVE_OB


def _check_comparable(pattern: Model, target: Model) -> None:
    if pattern.theory is not target.theory:
        raise UnsupportedTheory(
            f"Motif search needs both models in the same theory, got "
            f"{pattern.theory.name!r} and {target.theory.name!r}"
        )
    if not target.theory.is_discrete:
        raise UnsupportedTheory(
            f"Motif search supports discrete double theories only, "
            f"theory {target.theory.name!r} is {target.theory.kind.value}"
        )


def variable_order(pattern: Model) -> List[Tuple[str, str]]:
    """
    Order in which the search assigns the pattern's elements.

    Returns:
        List of ("ob", id) and ("mor", id) pairs covering the pattern
    """
    obs = pattern.objects()
    index = {x: i for i, x in enumerate(obs)}
    ends = [index[e] for m in pattern.morphisms()
            for e in (pattern.dom(m), pattern.cod(m)) if e is not None]
    degree = np.bincount(np.asarray(ends, dtype=np.intp), minlength=len(obs))
    ranked = [obs[i] for i in np.argsort(-degree, kind="stable")]

    order: List[Tuple[str, str]] = []
    placed = set()
    pending = pattern.morphisms()

    def flush():
        nonlocal pending
        ready = [m for m in pending
                 if all(e is None or e in placed for e in (pattern.dom(m), pattern.cod(m)))]
        order.extend(("mor", m) for m in ready)
        pending = [m for m in pending if m not in ready]

    flush()
    for x in ranked:
        order.append(("ob", x))
        placed.add(x)
        flush()
    return order


class MotifFinder:
    """
    Finds mappings between two models of a discrete double theory.

    Every mapping found is total and preserves types and endpoints.
    Injectivity and fixed assignments are opted into with the builder
    methods:

        finder = MotifFinder(pattern, target).monic().initialize_ob("a", "x")
        for mapping in finder.iter_mappings():
            ...

    No time budget is built in; ``iter_mappings`` is lazy, so a caller can
    stop after as many results as it wants.
    """

    def __init__(self, dom: Model, cod: Model):
        _check_comparable(dom, cod)
        self.dom = dom
        self.cod = cod
        self._injective_ob = False
        self._injective_mor = False
        self._ob_init: Dict[str, str] = {}
        self._mor_init: Dict[str, str] = {}
        self._var_order = variable_order(dom)
        self._ob_candidates, self._mor_candidates = self._candidates()

    def monic(self) -> "MotifFinder":
        """Restrict the search to mappings injective on objects and morphisms."""
        self._injective_ob = True
        self._injective_mor = True
        return self

    def injective_ob(self) -> "MotifFinder":
        self._injective_ob = True
        return self

    def initialize_ob(self, x: str, y: str) -> "MotifFinder":
        """Require the pattern object ``x`` to map to ``y``."""
        self._ob_init[x] = y
        return self

    def initialize_mor(self, m: str, n: str) -> "MotifFinder":
        self._mor_init[m] = n
        return self

    def _candidates(self) -> Tuple[Dict[str, List[str]], Dict[str, List[str]]]:
        # Group the target by normalized type once, then look up each pattern type.
        th = self.cod.theory
        obs_by_type: Dict[object, List[str]] = {}
        for y in self.cod.objects():
            obs_by_type.setdefault(th.normalize_ob_type(self.cod.ob_type(y)), []).append(y)
        mors_by_type: Dict[object, List[str]] = {}
        for n in self.cod.morphisms():
            mors_by_type.setdefault(th.normalize_mor_type(self.cod.mor_type(n)), []).append(n)

        ob_candidates = {
            x: obs_by_type.get(th.normalize_ob_type(self.dom.ob_type(x)), [])
            for x in self.dom.objects()
        }
        mor_candidates = {
            m: mors_by_type.get(th.normalize_mor_type(self.dom.mor_type(m)), [])
            for m in self.dom.morphisms()
        }
        return ob_candidates, mor_candidates

    def iter_mappings(self) -> Iterator[ModelMapping]:
        """Lazily enumerate every mapping satisfying the constraints."""
        return self._search(0, {}, {}, frozenset(), frozenset())

    def find_all(self) -> List[ModelMapping]:
        results = list(self.iter_mappings())
        logger.debug("Found %d mappings from %r into %r", len(results), self.dom.name, self.cod.name)
        return results

    def _search(self, depth: int,
                ob_map: Dict[str, str], mor_map: Dict[str, str],
                used_obs: FrozenSet[str], used_mors: FrozenSet[str]) -> Iterator[ModelMapping]:
        if depth == len(self._var_order):
            yield ModelMapping(dict(ob_map), dict(mor_map))
            return
        kind, x = self._var_order[depth]
        if kind == "ob":
            for y in self._ob_candidates[x]:
                if x in self._ob_init and self._ob_init[x] != y:
                    continue
                if self._injective_ob and y in used_obs:
                    continue
                yield from self._search(depth + 1, {**ob_map, x: y}, mor_map,
                                        used_obs | {y}, used_mors)
        else:
            for n in self._mor_candidates[x]:
                if x in self._mor_init and self._mor_init[x] != n:
                    continue
                if self._injective_mor and n in used_mors:
                    continue
                if not self._endpoints_agree(x, n, ob_map):
                    continue
                yield from self._search(depth + 1, ob_map, {**mor_map, x: n},
                                        used_obs, used_mors | {n})

    def _endpoints_agree(self, m: str, n: str, ob_map: Dict[str, str]) -> bool:
        for pattern_end, target_end in ((self.dom.dom(m), self.cod.dom(n)),
                                        (self.dom.cod(m), self.cod.cod(n))):
            expected = None if pattern_end is None else ob_map[pattern_end]
            if expected != target_end:
                return False
        return True


def _image_key(image: Model) -> Tuple[int, int, Tuple[str, ...], Tuple[str, ...]]:
    obs, mors = image.objects(), image.morphisms()
    return len(obs), len(mors), tuple(sorted(obs)), tuple(sorted(mors))


def motifs(pattern: Model, target: Model, options: Optional[MotifOptions] = None) -> List[Model]:
    """
    Find occurrences of a motif in a model.

    Args:
        pattern: The motif, a model of the same discrete theory as ``target``
        target: The model searched
        options: Injectivity settings; embeddings by default

    Returns:
        Distinct syntactic images of the mappings found, smallest first
        (by object count, then morphism count, then ids)

    Raises:
        UnsupportedTheory: If the models are not comparable
    """
    options = options or MotifOptions()
    finder = MotifFinder(pattern, target)
    if options.monic:
        finder.monic()
    elif options.injective_ob:
        finder.injective_ob()

    images = [mapping.syntactic_image(target) for mapping in finder.iter_mappings()]
    images.sort(key=_image_key)

    # Result sets are small, so pairwise comparison is fine.
    unique: List[Model] = []
    for image in images:
        if not any(image.structurally_equal(seen) for seen in unique):
            unique.append(image)
    logger.debug("Motif %r: %d mappings, %d distinct images in %r",
                 pattern.name, len(images), len(unique), target.name)
    return unique
