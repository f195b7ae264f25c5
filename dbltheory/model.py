"""
Model Module

Models of double theories: finitely many objects, each tagged with an
object type, and morphisms, each tagged with a morphism type and optional
domain and codomain.

Models are built incrementally. Insertion checks only that ids are fresh,
types registered and endpoints present; whether endpoints have the types
the morphism type asks for is checked by ``validate``, so declarations can
arrive in any order.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Union

from .constants import OPERATION_LIST_MODALITY
from .errors import (
    DanglingReference,
    DuplicateId,
    MissingCodomain,
    MissingDomain,
    OperationTypeError,
    TypeMismatch,
    ValidationError,
)
from .theory import DoubleTheory, Modality, ModalObType, MorType, ObType, TabulatorObType, TheoryKind

logger = logging.getLogger(__name__)


class Model:
    """
    A model of a double theory.

    The theory's kind tags which variant of model this is. In a tabulator
    theory a morphism endpoint may be another morphism of the model, seen as
    an object of the tabulator type.

    Attributes:
        theory: The double theory this model is an instance of
        name: Optional display name
    """

    def __init__(self, theory: DoubleTheory, name: str = ""):
        self.theory = theory
        self.name = name
        self._ob_types: Dict[str, ObType] = {}
        self._mor_types: Dict[str, MorType] = {}
        self._dom: Dict[str, Optional[str]] = {}
        self._cod: Dict[str, Optional[str]] = {}

    def __repr__(self):
        return (f"Model({self.name!r}, theory={self.theory.name!r}, "
                f"obs={len(self._ob_types)}, mors={len(self._mor_types)})")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _check_fresh(self, id: str) -> None:
        if id in self._ob_types or id in self._mor_types:
            raise DuplicateId(id)

    def _check_endpoint(self, id: str, endpoint: Optional[str]) -> None:
        if endpoint is None or endpoint in self._ob_types:
            return
        if self.theory.kind is TheoryKind.TABULATOR and endpoint in self._mor_types:
            return
        raise DanglingReference(endpoint, id)

    def add_ob(self, id: str, ob_type: Union[str, ObType]) -> None:
        """
        Add an object.

        Args:
            id: Fresh id for the object
            ob_type: Bound type name or registered object type expression

        Raises:
            DuplicateId: If ``id`` is already used in this model
            UnboundType: If the type is not registered on the theory
        """
        self._check_fresh(id)
        resolved = self.theory.ob_type(ob_type)
        self._ob_types[id] = resolved
        logger.debug("Added object %s: %s", id, resolved)

    def add_mor(self, id: str, dom: Optional[str], cod: Optional[str],
                mor_type: Union[str, MorType]) -> None:
        """
        Add a morphism with optional endpoints.

        Endpoint types are not checked here; see ``validate``.

        Raises:
            DuplicateId: If ``id`` is already used in this model
            DanglingReference: If an endpoint is given but not present
            UnboundType: If the type is not registered on the theory
        """
        self._check_fresh(id)
        self._check_endpoint(id, dom)
        self._check_endpoint(id, cod)
        resolved = self.theory.mor_type(mor_type)
        self._mor_types[id] = resolved
        self._dom[id] = dom
        self._cod[id] = cod
        logger.debug("Added morphism %s: %s -> %s : %s", id, dom, cod, resolved)

    def apply_ob_op(self, op: str, id: str, args: Union[str, Sequence[str]]) -> ObType:
        """
        Add an object produced by applying an object operation.

        Args:
            op: Name of an object operation of the theory
            id: Fresh id for the resulting object
            args: Id of an object, or a list of ids of objects sharing one
                type (the argument then has the list modality of that type)

        Returns:
            Type of the new object

        Raises:
            DanglingReference: If an argument is not an object of this model
            OperationTypeError: If the argument has the wrong type
        """
        self._check_fresh(id)
        ids = [args] if isinstance(args, str) else list(args)
        for arg in ids:
            if arg not in self._ob_types:
                raise DanglingReference(arg, id)
        if isinstance(args, str):
            arg_type = self._ob_types[args]
        else:
            types = {self.theory.normalize_ob_type(self._ob_types[a]) for a in ids}
            if len(types) != 1:
                raise OperationTypeError(op, "a non-empty list of one type", sorted(map(str, types)))
            arg_type = ModalObType(Modality[OPERATION_LIST_MODALITY], types.pop())
        result = self.theory.apply_ob_op(op, arg_type)
        self.add_ob(id, result)
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def objects(self) -> List[str]:
        return list(self._ob_types)

    def morphisms(self) -> List[str]:
        return list(self._mor_types)

    def has_ob(self, id: str) -> bool:
        return id in self._ob_types

    def has_mor(self, id: str) -> bool:
        return id in self._mor_types

    def ob_type(self, id: str) -> ObType:
        return self._ob_types[id]

    def mor_type(self, id: str) -> MorType:
        return self._mor_types[id]

    def dom(self, id: str) -> Optional[str]:
        return self._dom[id]

    def cod(self, id: str) -> Optional[str]:
        return self._cod[id]

    def endpoint_type(self, id: str) -> ObType:
        """Object type of an endpoint: an object, or a morphism as a tabulator object."""
        if id in self._ob_types:
            return self._ob_types[id]
        return TabulatorObType(self._mor_types[id])

    def obs_with_type(self, ob_type: Union[str, ObType]) -> List[str]:
        target = self.theory.normalize_ob_type(self.theory.ob_type(ob_type))
        return [x for x, t in self._ob_types.items()
                if self.theory.normalize_ob_type(t) == target]

    def mors_with_type(self, mor_type: Union[str, MorType]) -> List[str]:
        target = self.theory.normalize_mor_type(self.theory.mor_type(mor_type))
        return [m for m, t in self._mor_types.items()
                if self.theory.normalize_mor_type(t) == target]

    def is_empty(self) -> bool:
        return not self._ob_types and not self._mor_types

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def iter_invalid(self) -> Iterator[ValidationError]:
        """Iterate over every failure of the model to be well typed."""
        for m, mor_type in self._mor_types.items():
            for side, endpoint, expected in (
                ("dom", self._dom[m], self.theory.src(mor_type)),
                ("cod", self._cod[m], self.theory.tgt(mor_type)),
            ):
                if endpoint is None:
                    yield MissingDomain(m) if side == "dom" else MissingCodomain(m)
                    continue
                found = self.endpoint_type(endpoint)
                if not self.theory.ob_types_equal(found, expected):
                    yield TypeMismatch(m, side, expected, found)

    def validate(self) -> List[ValidationError]:
        """
        Check the whole model.

        Returns:
            Every violation found, in morphism order; empty if the model is valid
        """
        errors = list(self.iter_invalid())
        if errors:
            logger.debug("Model %r has %d validation errors", self.name, len(errors))
        return errors

    def is_valid(self) -> bool:
        return next(self.iter_invalid(), None) is None

    def structurally_equal(self, other: "Model") -> bool:
        """Same theory, same ids with equal types and endpoints."""
        if self.theory is not other.theory:
            return False
        if set(self._ob_types) != set(other._ob_types) or set(self._mor_types) != set(other._mor_types):
            return False
        th = self.theory
        if not all(th.ob_types_equal(t, other._ob_types[x]) for x, t in self._ob_types.items()):
            return False
        return all(
            th.mor_types_equal(t, other._mor_types[m])
            and self._dom[m] == other._dom[m]
            and self._cod[m] == other._cod[m]
            for m, t in self._mor_types.items()
        )
