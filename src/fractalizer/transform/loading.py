"""Data-access strategies used by transformers to reach related entities.

Both strategies read relations the same way (attribute access on the entity);
they differ only in whether the relations were fetched before resolution
starts. Lazy loading lets the ORM issue a query on first access. Eager
loading computes ``selectinload`` options from the include tree so the root
query pulls every requested relation up front.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, List, Mapping, Union

from sqlalchemy.orm import selectinload

from ..utils.logging import get_logger

if TYPE_CHECKING:
    from .inclusion import InclusionTree
    from .registry import TransformerRegistry

logger = get_logger(__name__)


def read_relation(entity: Any, accessor: Union[str, Callable[[Any], Any]]) -> Any:
    """Read a relation from an entity by attribute/key name or callable."""
    if callable(accessor):
        return accessor(entity)
    if isinstance(entity, Mapping):
        return entity.get(accessor)
    return getattr(entity, accessor)


class RelationLoader(ABC):
    """Interface for fetching related entities during resolution."""

    eager = False

    def load(self, entity: Any, accessor: Union[str, Callable[[Any], Any]]) -> Any:
        return read_relation(entity, accessor)

    @abstractmethod
    def query_options(self, registry: "TransformerRegistry", kind: str, tree: "InclusionTree") -> List[Any]:
        """Return ORM loader options to apply to the root query for ``kind``."""


class LazyRelationLoader(RelationLoader):
    """Fetch relations on first access (the ORM default)."""

    def query_options(self, registry, kind, tree):
        return []


class EagerRelationLoader(RelationLoader):
    """
    Pre-fetch requested relations with ``selectinload`` before resolving.

    Experimental: only relations whose accessor is a plain attribute name on
    the transformer's ``model`` can be eager loaded; anything else silently
    falls back to lazy access at resolution time.
    """

    eager = True

    def query_options(self, registry, kind, tree):
        options: List[Any] = []
        for path in tree.paths():
            option = self._build_chain(registry, kind, path.split("."))
            if option is not None:
                options.append(option)
        logger.debug(f"Eager load options for {kind} [{tree.serialize()}]: {len(options)}")
        return options

    def _build_chain(self, registry: "TransformerRegistry", kind: str, segments: List[str]) -> Any:
        option = None
        current_kind = kind
        for segment in segments:
            transformer = registry.lookup(current_kind)
            include = transformer.available_includes.get(segment)
            model = getattr(transformer, "model", None)
            accessor = (include.accessor or segment) if include else None
            if include is None or model is None or not isinstance(accessor, str):
                logger.debug(f"Cannot eager load '{segment}' on {current_kind}; leaving it lazy")
                break
            attribute = getattr(model, accessor, None)
            if attribute is None:
                logger.debug(f"{model.__name__} has no relationship '{accessor}'; leaving it lazy")
                break
            option = selectinload(attribute) if option is None else option.selectinload(attribute)
            current_kind = include.target
        return option


def build_loader(eager_load_includes: bool = False) -> RelationLoader:
    """Pick the relation loading strategy from configuration."""
    if eager_load_includes:
        logger.warning("eager_load_includes is experimental; falling back to lazy loading on any unsupported relation")
        return EagerRelationLoader()
    return LazyRelationLoader()
