"""
Errors Module

Exceptions raised by construction operations, and the records collected by
model validation.

Construction errors (adding generators, objects, morphisms, bindings) are
raised immediately and abort only the offending mutation. Validation errors
are plain records: a model is checked as a whole and every violation is
reported at once.
"""

from typing import Any, Optional, Union
from dataclasses import dataclass


class DoubleTheoryError(ValueError):
    """Base class for all errors raised by this package."""


class DuplicateId(DoubleTheoryError):
    """An id or name is already in use."""

    def __init__(self, id: str, what: str = "element"):
        self.id = id
        super().__init__(f"Duplicate {what} id: {id!r}")


class UnboundType(DoubleTheoryError):
    """A type name or expression is not registered on the theory."""

    def __init__(self, type_: Any):
        self.type = type_
        super().__init__(f"Type not registered on theory: {type_!r}")


class DanglingReference(DoubleTheoryError):
    """A reference to an object or generator that does not exist."""

    def __init__(self, id: str, referrer: Optional[str] = None):
        self.id = id
        self.referrer = referrer
        where = f" from {referrer!r}" if referrer is not None else ""
        super().__init__(f"Dangling reference to {id!r}{where}")


class PathMismatch(DoubleTheoryError):
    """Two paths (or a path and a generator) do not meet end to end."""

    def __init__(self, cod: str, dom: str):
        self.cod = cod
        self.dom = dom
        super().__init__(f"Cannot compose: codomain {cod!r} != domain {dom!r}")


class TypeCompositionError(DoubleTheoryError):
    """Composite of two morphism types whose target and source disagree."""

    def __init__(self, first: Any, second: Any, tgt: Any, src: Any):
        self.first = first
        self.second = second
        self.expected = tgt
        self.found = src
        super().__init__(
            f"Cannot compose {first!r} then {second!r}: target {tgt!r} != source {src!r}"
        )


class OperationTypeError(DoubleTheoryError):
    """An operation applied to an argument of the wrong type."""

    def __init__(self, operation: str, expected: Any = None, found: Any = None):
        self.operation = operation
        self.expected = expected
        self.found = found
        if expected is None:
            message = f"Unknown operation: {operation!r}"
        else:
            message = f"Operation {operation!r} expects {expected!r}, got {found!r}"
        super().__init__(message)


class UnsupportedTheory(DoubleTheoryError):
    """Models are not comparable, or their theory kind is not supported."""


class RewriteLimitExceeded(DoubleTheoryError):
    """Path normalization did not terminate within the step budget."""

    def __init__(self, steps: int):
        self.steps = steps
        super().__init__(f"Path normalization exceeded {steps} rewrite steps")


@dataclass(frozen=True)
class MissingDomain:
    """A morphism without a domain."""
    entity: str


@dataclass(frozen=True)
class MissingCodomain:
    """A morphism without a codomain."""
    entity: str


@dataclass(frozen=True)
class TypeMismatch:
    """
    An endpoint whose object type disagrees with the morphism type.

    Attributes:
        entity: Id of the offending morphism
        side: Either "dom" or "cod"
        expected: Object type required by the morphism type
        found: Object type of the endpoint
    """
    entity: str
    side: str
    expected: Any
    found: Any


ValidationError = Union[MissingDomain, MissingCodomain, TypeMismatch]


@dataclass(frozen=True)
class MappingError:
    """
    A failure of a model mapping to be a model morphism.

    ``kind`` is one of "ob", "mor" (unmapped or mapped outside the codomain),
    "dom", "cod" (endpoint not preserved), "ob_type", "mor_type".
    """
    kind: str
    entity: str
