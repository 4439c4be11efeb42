"""Transformer contract: one transformer per entity kind.

A transformer turns an entity into a flat field mapping and declares which
relations a client may ask to embed. Relations are never traversed by
``transform`` itself; they are fetched through ``resolve_include`` so the
resolver stays in control of what gets loaded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from ..errors import TransformerConfigError
from .loading import LazyRelationLoader, RelationLoader

ITEM = "item"
COLLECTION = "collection"

Accessor = Union[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class Include:
    """Declaration of one includable relation."""

    resource: str  # "item" | "collection"
    target: str  # kind of the related entity
    accessor: Optional[Accessor] = None  # attribute name or callable; defaults to the include name

    def __post_init__(self) -> None:
        if self.resource not in (ITEM, COLLECTION):
            raise TransformerConfigError(
                f"Include resource must be '{ITEM}' or '{COLLECTION}', got '{self.resource}'"
            )

    @classmethod
    def item(cls, target: str, accessor: Optional[Accessor] = None) -> "Include":
        return cls(ITEM, target, accessor)

    @classmethod
    def collection(cls, target: str, accessor: Optional[Accessor] = None) -> "Include":
        return cls(COLLECTION, target, accessor)

    @property
    def is_collection(self) -> bool:
        return self.resource == COLLECTION


class Transformer(ABC):
    """
    Base class for entity transformers.

    Subclasses set ``kind`` and ``available_includes`` and implement
    ``transform``. Collaborators (relation loader, field policy) are passed to
    the constructor; instances hold no per-request state.
    """

    kind: ClassVar[str] = ""
    available_includes: ClassVar[Dict[str, Include]] = {}
    model: ClassVar[Optional[type]] = None  # ORM class, needed only for eager loading

    def __init__(self, loader: Optional[RelationLoader] = None):
        if not self.kind:
            raise TransformerConfigError(f"{type(self).__name__} does not declare a kind")
        self.loader = loader or LazyRelationLoader()

    @abstractmethod
    def transform(self, entity: Any) -> Dict[str, Any]:
        """Return the flat field mapping for ``entity`` (no related resources)."""

    def include_names(self) -> List[str]:
        return list(self.available_includes)

    def get_include(self, name: str) -> Include:
        try:
            return self.available_includes[name]
        except KeyError:
            raise TransformerConfigError(
                f"{type(self).__name__} has no include '{name}'"
            ) from None

    def resolve_include(self, entity: Any, name: str) -> Tuple[str, Union[Any, Sequence[Any], None]]:
        """
        Fetch the related entity (or entities) for a declared include.

        Returns:
            (target kind, related entity | ordered sequence of entities | None)

        Raises:
            TransformerConfigError: If ``name`` is not declared
        """
        include = self.get_include(name)
        related = self.loader.load(entity, include.accessor or name)
        if include.is_collection:
            related = list(related or [])
        return include.target, related
