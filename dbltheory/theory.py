"""
Double Theory Module

Double theories: a category of types together with a table binding
human-facing names to object and morphism types, operations on types, and
the law for composing morphism types.

Type expressions are small frozen values:

    ObType  := BasicObType(name) | ModalObType(modality, ObType)
             | TabulatorObType(MorType)
    MorType := HomType(ObType) | BasicMorType(name)
             | CompositeMorType(parts) | ModalMorType(modality, MorType)

A theory carries a kind tag. Discrete theories use only basic, hom and
composite types; modal theories add modalities; tabulator theories add
tabulators.
"""

from typing import Any, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from .category import FpCategory
from .errors import DuplicateId, OperationTypeError, TypeCompositionError, UnboundType
from .path import Path


class TheoryKind(Enum):
    DISCRETE = "discrete"
    MODAL = "modal"
    TABULATOR = "tabulator"


class Modality(Enum):
    """Modalities applicable to types in a modal theory."""
    LIST = "list"
    SYMMETRIC_LIST = "symmetric_list"
    COCARTESIAN_LIST = "cocartesian_list"


@dataclass(frozen=True)
class BasicObType:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class ModalObType:
    modality: Modality
    inner: Any

    def __str__(self):
        return f"{self.modality.value}({self.inner})"


@dataclass(frozen=True)
class TabulatorObType:
    mor_type: Any

    def __str__(self):
        return f"Tab({self.mor_type})"


@dataclass(frozen=True)
class HomType:
    ob_type: Any

    def __str__(self):
        return f"Hom({self.ob_type})"


@dataclass(frozen=True)
class BasicMorType:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class CompositeMorType:
    parts: Tuple[Any, ...]

    def __str__(self):
        return " ; ".join(str(p) for p in self.parts)


@dataclass(frozen=True)
class ModalMorType:
    modality: Modality
    inner: Any

    def __str__(self):
        return f"{self.modality.value}({self.inner})"


ObType = Union[BasicObType, ModalObType, TabulatorObType]
MorType = Union[HomType, BasicMorType, CompositeMorType, ModalMorType]


@dataclass(frozen=True)
class Operation:
    """A unary operation on object types or on morphism types."""
    name: str
    dom: Any
    cod: Any


class DoubleTheory:
    """
    A double theory.

    Holds the category of types, the name binding table and the registered
    operations. Built once; models share it read-only.

    Attributes:
        name: Name of the theory
        kind: Which family of double theory this is
        category: The category of types
    """

    def __init__(self, name: str, kind: TheoryKind = TheoryKind.DISCRETE):
        self.name = name
        self.kind = kind
        self.category = FpCategory(name=name)
        self._ob_bindings: Dict[str, ObType] = {}
        self._mor_bindings: Dict[str, MorType] = {}
        # Morphism types whose boundary is not made of basic object types.
        self._mor_signatures: Dict[str, Tuple[ObType, ObType]] = {}
        self._ob_ops: Dict[str, Operation] = {}
        self._mor_ops: Dict[str, Operation] = {}

    def __repr__(self):
        return f"DoubleTheory({self.name!r}, kind={self.kind.value})"

    @property
    def is_discrete(self) -> bool:
        return self.kind is TheoryKind.DISCRETE

    # ------------------------------------------------------------------
    # Generators and bindings
    # ------------------------------------------------------------------

    def add_ob_type(self, name: str) -> BasicObType:
        """Add a basic object type and bind it under its own name."""
        self.category.add_ob_generator(name)
        ob_type = BasicObType(name)
        self.bind_ob_type(name, ob_type)
        return ob_type

    def add_mor_type(self, name: str, src: ObType, tgt: ObType) -> BasicMorType:
        """
        Add a basic morphism type and bind it under its own name.

        Morphism types between basic object types become generators of the
        type category; others (into a tabulator, out of a list) are kept in
        the theory's own signature table.
        """
        src, tgt = self.ob_type(src), self.ob_type(tgt)
        if name in self._mor_signatures:
            raise DuplicateId(name, "morphism type")
        if isinstance(src, BasicObType) and isinstance(tgt, BasicObType):
            self.category.add_mor_generator(name, src.name, tgt.name)
        else:
            if self.category.has_mor(name):
                raise DuplicateId(name, "morphism type")
            self._mor_signatures[name] = (src, tgt)
        mor_type = BasicMorType(name)
        self.bind_mor_type(name, mor_type)
        return mor_type

    def bind_ob_type(self, name: str, ob_type: ObType) -> None:
        if name in self._ob_bindings:
            raise DuplicateId(name, "object type name")
        self._ob_bindings[name] = self.ob_type(ob_type)

    def bind_mor_type(self, name: str, mor_type: MorType) -> None:
        if name in self._mor_bindings:
            raise DuplicateId(name, "morphism type name")
        self._mor_bindings[name] = self.mor_type(mor_type)

    def ob_type_names(self) -> List[str]:
        return list(self._ob_bindings)

    def mor_type_names(self) -> List[str]:
        return list(self._mor_bindings)

    def has_ob_type(self, ob_type: Union[str, ObType]) -> bool:
        """Is this a bound name or a type expression built from registered parts?"""
        if isinstance(ob_type, str):
            return ob_type in self._ob_bindings
        if isinstance(ob_type, BasicObType):
            return self.category.has_ob(ob_type.name)
        if isinstance(ob_type, ModalObType):
            return self.kind is TheoryKind.MODAL and self.has_ob_type(ob_type.inner)
        if isinstance(ob_type, TabulatorObType):
            return self.kind is TheoryKind.TABULATOR and self.has_mor_type(ob_type.mor_type)
        return False

    def has_mor_type(self, mor_type: Union[str, MorType]) -> bool:
        if isinstance(mor_type, str):
            return mor_type in self._mor_bindings
        if isinstance(mor_type, HomType):
            return self.has_ob_type(mor_type.ob_type)
        if isinstance(mor_type, BasicMorType):
            return self.category.has_mor(mor_type.name) or mor_type.name in self._mor_signatures
        if isinstance(mor_type, CompositeMorType):
            parts = mor_type.parts
            if not parts or not all(self.has_mor_type(p) for p in parts):
                return False
            return all(self.ob_types_equal(self.tgt(a), self.src(b)) for a, b in zip(parts, parts[1:]))
        if isinstance(mor_type, ModalMorType):
            return self.kind is TheoryKind.MODAL and self.has_mor_type(mor_type.inner)
        return False

    def ob_type(self, ob_type: Union[str, ObType]) -> ObType:
        """
        Resolve a bound name or registered expression to an object type.

        Names nested inside an expression are resolved too, so the result
        contains no strings.

        Raises:
            UnboundType: If the name is unbound or the expression unregistered
        """
        if not self.has_ob_type(ob_type):
            raise UnboundType(ob_type)
        return self._resolve_ob(ob_type)

    def mor_type(self, mor_type: Union[str, MorType]) -> MorType:
        if not self.has_mor_type(mor_type):
            raise UnboundType(mor_type)
        return self._resolve_mor(mor_type)

    def _resolve_ob(self, t):
        if isinstance(t, str):
            return self._ob_bindings[t]
        if isinstance(t, ModalObType):
            return ModalObType(t.modality, self._resolve_ob(t.inner))
        if isinstance(t, TabulatorObType):
            return TabulatorObType(self._resolve_mor(t.mor_type))
        return t

    def _resolve_mor(self, t):
        if isinstance(t, str):
            return self._mor_bindings[t]
        if isinstance(t, HomType):
            return HomType(self._resolve_ob(t.ob_type))
        if isinstance(t, CompositeMorType):
            return CompositeMorType(tuple(self._resolve_mor(p) for p in t.parts))
        if isinstance(t, ModalMorType):
            return ModalMorType(t.modality, self._resolve_mor(t.inner))
        return t

    def hom_type(self, ob_type: Union[str, ObType]) -> HomType:
        return HomType(self.ob_type(ob_type))

    def tabulator(self, mor_type: Union[str, MorType]) -> TabulatorObType:
        return TabulatorObType(self.mor_type(mor_type))

    # ------------------------------------------------------------------
    # Boundaries and composition
    # ------------------------------------------------------------------

    def src(self, mor_type: Union[str, MorType]) -> ObType:
        """Source object type of a morphism type."""
        t = self.mor_type(mor_type) if isinstance(mor_type, str) else mor_type
        if isinstance(t, HomType):
            return t.ob_type
        if isinstance(t, BasicMorType):
            if t.name in self._mor_signatures:
                return self._mor_signatures[t.name][0]
            return BasicObType(self.category.dom(t.name))
        if isinstance(t, CompositeMorType):
            return self.src(t.parts[0])
        if isinstance(t, ModalMorType):
            return ModalObType(t.modality, self.src(t.inner))
        raise UnboundType(t)

    def tgt(self, mor_type: Union[str, MorType]) -> ObType:
        """Target object type of a morphism type."""
        t = self.mor_type(mor_type) if isinstance(mor_type, str) else mor_type
        if isinstance(t, HomType):
            return t.ob_type
        if isinstance(t, BasicMorType):
            if t.name in self._mor_signatures:
                return self._mor_signatures[t.name][1]
            return BasicObType(self.category.cod(t.name))
        if isinstance(t, CompositeMorType):
            return self.tgt(t.parts[-1])
        if isinstance(t, ModalMorType):
            return ModalObType(t.modality, self.tgt(t.inner))
        raise UnboundType(t)

    def compose_types(self, first: Union[str, MorType], second: Union[str, MorType]) -> MorType:
        """
        Compose two morphism types, ``first`` then ``second``.

        Returns:
            The normalized composite type

        Raises:
            TypeCompositionError: If ``tgt(first) != src(second)``
        """
        t1, t2 = self.mor_type(first), self.mor_type(second)
        tgt, src = self.tgt(t1), self.src(t2)
        if not self.ob_types_equal(tgt, src):
            raise TypeCompositionError(t1, t2, tgt, src)
        return self.normalize_mor_type(CompositeMorType((t1, t2)))

    # ------------------------------------------------------------------
    # Normal forms and equality
    # ------------------------------------------------------------------

    def normalize_ob_type(self, ob_type: ObType) -> ObType:
        if isinstance(ob_type, ModalObType):
            return ModalObType(ob_type.modality, self.normalize_ob_type(ob_type.inner))
        if isinstance(ob_type, TabulatorObType):
            return TabulatorObType(self.normalize_mor_type(ob_type.mor_type))
        return ob_type

    def normalize_mor_type(self, mor_type: MorType) -> MorType:
        """
        Canonical form of a morphism type.

        Composites are flattened, hom types are dropped as units, and runs of
        basic generators are rewritten with the type category's equations.
        """
        if isinstance(mor_type, HomType):
            return HomType(self.normalize_ob_type(mor_type.ob_type))
        if isinstance(mor_type, ModalMorType):
            return ModalMorType(mor_type.modality, self.normalize_mor_type(mor_type.inner))
        if isinstance(mor_type, BasicMorType):
            return self._normalize_parts([mor_type], self.src(mor_type))
        if isinstance(mor_type, CompositeMorType):
            flat: List[MorType] = []
            for part in mor_type.parts:
                part = self.normalize_mor_type(part)
                if isinstance(part, CompositeMorType):
                    flat.extend(part.parts)
                elif not isinstance(part, HomType):
                    flat.append(part)
            return self._normalize_parts(flat, self.normalize_ob_type(self.src(mor_type)))
        raise UnboundType(mor_type)

    def _normalize_parts(self, parts: List[MorType], src: ObType) -> MorType:
        result: List[MorType] = []
        run: List[str] = []

        def flush():
            if run:
                path = self.category.normalize(self.category.path(run))
                result.extend(BasicMorType(g) for g in path)
                run.clear()

        for part in parts:
            if isinstance(part, BasicMorType) and self.category.has_mor(part.name):
                run.append(part.name)
            else:
                flush()
                result.append(part)
        flush()
        if not result:
            return HomType(src)
        if len(result) == 1:
            return result[0]
        return CompositeMorType(tuple(result))

    def ob_types_equal(self, a: ObType, b: ObType) -> bool:
        return a == b or self.normalize_ob_type(a) == self.normalize_ob_type(b)

    def mor_types_equal(self, a: MorType, b: MorType) -> bool:
        return a == b or self.normalize_mor_type(a) == self.normalize_mor_type(b)

    def path_of(self, mor_type: MorType) -> Optional[Path]:
        """The path in the type category denoted by a discrete morphism type, if any."""
        t = self.normalize_mor_type(mor_type)
        if isinstance(t, HomType) and isinstance(t.ob_type, BasicObType):
            return Path.identity(t.ob_type.name)
        parts = t.parts if isinstance(t, CompositeMorType) else (t,)
        if all(isinstance(p, BasicMorType) and self.category.has_mor(p.name) for p in parts):
            return self.category.path([p.name for p in parts])
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add_ob_op(self, name: str, dom: ObType, cod: ObType) -> Operation:
        """Register an operation taking objects of type ``dom`` to type ``cod``."""
        if name in self._ob_ops:
            raise DuplicateId(name, "object operation")
        op = Operation(name, self.ob_type(dom), self.ob_type(cod))
        self._ob_ops[name] = op
        return op

    def add_mor_op(self, name: str, dom: MorType, cod: MorType) -> Operation:
        if name in self._mor_ops:
            raise DuplicateId(name, "morphism operation")
        op = Operation(name, self.mor_type(dom), self.mor_type(cod))
        self._mor_ops[name] = op
        return op

    def ob_ops(self) -> List[Operation]:
        return list(self._ob_ops.values())

    def mor_ops(self) -> List[Operation]:
        return list(self._mor_ops.values())

    def apply_ob_op(self, name: str, ob_type: ObType) -> ObType:
        """
        Type of the result of applying an object operation.

        Raises:
            OperationTypeError: If the operation is unknown or ``ob_type``
                is not its domain
        """
        op = self._ob_ops.get(name)
        if op is None:
            raise OperationTypeError(name)
        if not self.ob_types_equal(op.dom, ob_type):
            raise OperationTypeError(name, op.dom, ob_type)
        return op.cod

    def apply_mor_op(self, name: str, mor_type: MorType) -> MorType:
        op = self._mor_ops.get(name)
        if op is None:
            raise OperationTypeError(name)
        if not self.mor_types_equal(op.dom, mor_type):
            raise OperationTypeError(name, op.dom, mor_type)
        return op.cod
