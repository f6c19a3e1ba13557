"""Reconciliation engines.

Exports
-------
SetReconciler
    Classifies local and remote collections into sync actions.
AttributeDiffer
    Computes field updates for one matched local/remote pair.
StatusVocabulary
    Translates status tokens between local and remote vocabularies.
IdentifierIndex
    Identifier-to-entity index used for O(n) matching.
normalize_identifier
    Map falsy identifiers to ``None``.
canonical_status
    Read an entity's lowercased status, or ``None``.
"""

from .attribute_differ import AttributeDiffer
from .identity import IdentifierIndex, normalize_identifier
from .set_reconciler import SetReconciler
from .status import canonical_status
from .vocabulary import StatusVocabulary

__all__ = [
    "AttributeDiffer",
    "IdentifierIndex",
    "SetReconciler",
    "StatusVocabulary",
    "canonical_status",
    "normalize_identifier",
]
