"""
Declarations Module

Records produced by the surrounding notebook (one per object or morphism
cell) and the functions that apply them to a model in order.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union
from dataclasses import dataclass

from .errors import DoubleTheoryError
from .model import Model
from .theory import DoubleTheory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjectDeclaration:
    id: str
    ob_type: str


@dataclass(frozen=True)
class MorphismDeclaration:
    id: str
    mor_type: str
    dom: Optional[str] = None
    cod: Optional[str] = None


Declaration = Union[ObjectDeclaration, MorphismDeclaration]


def apply_declaration(model: Model, decl: Declaration) -> None:
    if isinstance(decl, ObjectDeclaration):
        model.add_ob(decl.id, decl.ob_type)
    elif isinstance(decl, MorphismDeclaration):
        model.add_mor(decl.id, decl.dom, decl.cod, decl.mor_type)
    else:
        raise TypeError(f"Not a declaration: {decl!r}")


def apply_declarations(model: Model, decls: Iterable[Declaration],
                       strict: bool = True) -> List[Tuple[Declaration, DoubleTheoryError]]:
    """
    Apply declarations to a model in order.

    Args:
        model: Model to extend
        decls: Object and morphism declarations
        strict: Raise on the first construction error. Otherwise skip the
            offending declaration, log it and carry on.

    Returns:
        The skipped declarations with their errors (always empty when strict)
    """
    skipped: List[Tuple[Declaration, DoubleTheoryError]] = []
    for decl in decls:
        try:
            apply_declaration(model, decl)
        except DoubleTheoryError as err:
            if strict:
                raise
            logger.warning("Skipping declaration %r: %s", decl.id, err)
            skipped.append((decl, err))
    return skipped


def model_from_declarations(theory: DoubleTheory, decls: Iterable[Declaration],
                            name: str = "") -> Model:
    """Build a new model from declarations, raising on the first error."""
    model = Model(theory, name=name)
    apply_declarations(model, decls)
    return model
