"""Resolver: turns entities plus an include tree into nested resource data.

Resolution is synchronous and scoped to one request. The include tree is
checked against the declared includes before any entity is read, so a bad
selection never triggers a lazy load and never produces partial output.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..errors import MaxDepthExceededError, UndeclaredIncludeError
from ..utils.logging import get_logger
from .envelope import PaginationSource, collection_envelope, item_envelope, wrap
from .inclusion import InclusionTree, parse_includes
from .registry import TransformerRegistry

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 10

Node = Dict[str, Any]
Resolved = Union[Node, List[Node], None]


def is_collection(value: Any) -> bool:
    """
    Any non-string, non-mapping iterable is a collection.

    Covers lists, ORM instrumented lists, generators and query objects. Mappings
    stay single entities because relations can be read from them by key.
    """
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def _coerce_tree(includes: Union[str, InclusionTree, None]) -> InclusionTree:
    if isinstance(includes, InclusionTree):
        return includes
    return parse_includes(includes)


class Fractalizer:
    """
    Resolve entities into nested, serializable resource data.

    Args:
        registry: Transformer registry used for every kind lookup
        max_depth: Deepest include nesting allowed (``comments.author`` is 2)
    """

    def __init__(self, registry: TransformerRegistry, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.registry = registry
        self.max_depth = max_depth

    def validate(self, kind: str, tree: InclusionTree) -> None:
        """
        Check a tree against declared includes and the depth limit.

        Raises:
            UnknownKindError: If ``kind`` (or an include target) is not registered
            UndeclaredIncludeError: If any requested name is not declared at its level
            MaxDepthExceededError: If the tree is nested deeper than ``max_depth``
        """
        depth = tree.depth()
        if depth > self.max_depth:
            raise MaxDepthExceededError(depth, self.max_depth, tree.serialize())
        self._validate_level(kind, tree, prefix="")

    def _validate_level(self, kind: str, tree: InclusionTree, prefix: str) -> None:
        transformer = self.registry.lookup(kind)
        for name, subtree in tree.items():
            path = f"{prefix}{name}"
            include = transformer.available_includes.get(name)
            if include is None:
                raise UndeclaredIncludeError(kind, name, transformer.include_names(), path)
            if subtree:
                self._validate_level(include.target, subtree, prefix=f"{path}.")

    def resolve(self, value: Any, kind: str, tree: Optional[InclusionTree] = None, _depth: int = 0) -> Resolved:
        """
        Resolve an entity, a sequence of entities, or None.

        Collections keep their input order and are never deduplicated. A failure
        on any member fails the whole call.
        """
        tree = tree or InclusionTree()
        if value is None:
            return None
        if is_collection(value):
            return [self._resolve_entity(entity, kind, tree, _depth) for entity in value]
        return self._resolve_entity(value, kind, tree, _depth)

    def _resolve_entity(self, entity: Any, kind: str, tree: InclusionTree, depth: int) -> Node:
        transformer = self.registry.lookup(kind)
        node = dict(transformer.transform(entity))
        if not tree:
            return node

        if depth + 1 > self.max_depth:
            raise MaxDepthExceededError(depth + 1, self.max_depth)

        for name, subtree in tree.items():
            if name not in transformer.available_includes:
                raise UndeclaredIncludeError(kind, name, transformer.include_names())
            target_kind, related = transformer.resolve_include(entity, name)
            node[name] = wrap(self.resolve(related, target_kind, subtree, depth + 1))
        return node

    def item(
        self,
        entity: Any,
        kind: str,
        includes: Union[str, InclusionTree, None] = None,
    ) -> Dict[str, Any]:
        """Parse, validate, resolve and wrap a single entity as ``{"data": ...}``."""
        tree = _coerce_tree(includes)
        self.validate(kind, tree)
        logger.debug(f"Resolving {kind} item [{tree.serialize()}]")
        return item_envelope(self.resolve(entity, kind, tree))

    def collection(
        self,
        entities: Sequence[Any],
        kind: str,
        includes: Union[str, InclusionTree, None] = None,
        paginator: Optional[PaginationSource] = None,
    ) -> Dict[str, Any]:
        """Parse, validate, resolve and wrap a collection, with optional pagination meta."""
        tree = _coerce_tree(includes)
        self.validate(kind, tree)
        entities = list(entities)
        logger.debug(f"Resolving {len(entities)} {kind} items [{tree.serialize()}]")
        return collection_envelope(self.resolve(entities, kind, tree), paginator)
