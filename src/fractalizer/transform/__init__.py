"""Resource transformation: transformers, include parsing, resolution, envelopes."""

from .base import COLLECTION, ITEM, Include, Transformer
from .envelope import collection_envelope, item_envelope
from .inclusion import InclusionTree, includes_from_params, parse_includes
from .loading import EagerRelationLoader, LazyRelationLoader, RelationLoader, build_loader
from .registry import TransformerRegistry
from .resolver import DEFAULT_MAX_DEPTH, Fractalizer

__all__ = [
    "COLLECTION",
    "DEFAULT_MAX_DEPTH",
    "EagerRelationLoader",
    "Fractalizer",
    "ITEM",
    "Include",
    "InclusionTree",
    "LazyRelationLoader",
    "RelationLoader",
    "Transformer",
    "TransformerRegistry",
    "build_loader",
    "collection_envelope",
    "includes_from_params",
    "item_envelope",
    "parse_includes",
]
