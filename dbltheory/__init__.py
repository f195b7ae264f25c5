"""
dbltheory - Double Theories and Their Models

A typed algebraic framework for structured diagrams (schemas, signed
categories, causal loop diagrams) as models of double theories, with
validation and motif search.
"""

__version__ = "0.1.0"

from .path import Path
from .category import FpCategory
from .theory import (
    BasicMorType,
    BasicObType,
    CompositeMorType,
    DoubleTheory,
    HomType,
    Modality,
    ModalMorType,
    ModalObType,
    TabulatorObType,
    TheoryKind,
)
from .model import Model
from .mapping import ModelMapping
from .motifs import MotifFinder, MotifOptions, motifs
from .declarations import MorphismDeclaration, ObjectDeclaration, apply_declarations, model_from_declarations
from .errors import (
    DanglingReference,
    DoubleTheoryError,
    DuplicateId,
    MappingError,
    MissingCodomain,
    MissingDomain,
    OperationTypeError,
    PathMismatch,
    RewriteLimitExceeded,
    TypeCompositionError,
    TypeMismatch,
    UnboundType,
    UnsupportedTheory,
)

__all__ = [
    "Path",
    "FpCategory",
    "DoubleTheory",
    "TheoryKind",
    "Modality",
    "BasicObType",
    "ModalObType",
    "TabulatorObType",
    "HomType",
    "BasicMorType",
    "CompositeMorType",
    "ModalMorType",
    "Model",
    "ModelMapping",
    "MotifFinder",
    "MotifOptions",
    "motifs",
    "ObjectDeclaration",
    "MorphismDeclaration",
    "apply_declarations",
    "model_from_declarations",
    "DoubleTheoryError",
    "DuplicateId",
    "UnboundType",
    "DanglingReference",
    "PathMismatch",
    "TypeCompositionError",
    "OperationTypeError",
    "UnsupportedTheory",
    "RewriteLimitExceeded",
    "MissingDomain",
    "MissingCodomain",
    "TypeMismatch",
    "MappingError",
]
