# dbltheory/constants.py
"""
Double Theory Constants

This module defines the tunables used throughout the package:

LAYER 1: Category Constants (Path Normalization)
- MAX_REWRITE_STEPS: Budget for rewriting a path with a category's equations

LAYER 2: Model Constants (Operations)
- OPERATION_LIST_MODALITY: Modality wrapped around list arguments of operations

LAYER 3: Motif Search Constants
- DEFAULT_MONIC: Whether motif search requires injective mappings
- DEFAULT_INJECTIVE_OB: Whether motif search requires injectivity on objects
"""


# =============================================================================
# LAYER 1: Category Constants (Path Normalization)
# =============================================================================

# Equations are oriented left-to-right as rewrite rules. Confluent,
# terminating rule sets normalize in far fewer steps than this.
MAX_REWRITE_STEPS = 1000


# =============================================================================
# LAYER 2: Model Constants (Operations)
# =============================================================================

# Name of the Modality member used when an operation is applied to a list
# of objects rather than a single one.
OPERATION_LIST_MODALITY = "LIST"


# =============================================================================
# LAYER 3: Motif Search Constants
# =============================================================================

# Motifs are embeddings: injective on objects and on morphisms.
DEFAULT_MONIC = True
DEFAULT_INJECTIVE_OB = True

assert DEFAULT_INJECTIVE_OB or not DEFAULT_MONIC, "Monic search implies injective on objects"
