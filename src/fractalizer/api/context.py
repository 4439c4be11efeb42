"""Per-request wiring: registry, loader strategy and settings in one place."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..auth.policy import FieldPolicy, Viewer
from ..config.loader import (
    PaginationSettings,
    TransformSettings,
    get_pagination_settings,
    get_transform_settings,
)
from ..errors import InvalidPaginationError
from ..pagination import PagePaginator
from ..transform.inclusion import InclusionTree, parse_includes
from ..transform.loading import RelationLoader, build_loader
from ..transform.resolver import Fractalizer
from ..transformers import build_registry
from .models import ListParams


@dataclass
class ApiContext:
    fractalizer: Fractalizer
    loader: RelationLoader
    transform: TransformSettings
    pagination: PaginationSettings

    def prepare(self, kind: str, includes: Optional[str]) -> InclusionTree:
        """Parse and validate a selection for ``kind`` before any row is read."""
        tree = parse_includes(includes)
        self.fractalizer.validate(kind, tree)
        return tree

    def query_options(self, kind: str, tree: InclusionTree) -> List[Any]:
        return self.loader.query_options(self.fractalizer.registry, kind, tree)

    def per_page(self, requested: Optional[int]) -> int:
        if requested is None:
            return self.pagination.per_page
        return min(requested, self.pagination.max_per_page)

    def paginator(self, path: str, tree: InclusionTree, total: int, count: int, page: int, per_page: int) -> PagePaginator:
        params: Dict[str, Any] = {
            self.transform.include_param: tree.serialize() or None,
            "per_page": per_page,
        }
        return PagePaginator(
            total=total,
            count=count,
            page=page,
            per_page=per_page,
            base_url=f"{self.pagination.base_url}{path}",
            params=params,
        )

    def list_params(self, page: Any, per_page: Any) -> ListParams:
        """
        Validate collection parameters before anything is queried.

        Raises:
            InvalidPaginationError: If ``page`` or ``per_page`` is not a positive integer
        """
        try:
            return ListParams(page=page, per_page=per_page)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "params"
            raise InvalidPaginationError(field, error.get("input"), error["msg"]) from e


def build_context(config: Optional[Dict[str, Any]] = None, viewer: Optional[Viewer] = None) -> ApiContext:
    """
    Build the API context from configuration.

    Args:
        config: Loaded config dict (defaults apply for missing sections)
        viewer: Caller identity for field visibility (anonymous when omitted)
    """
    config = config or {}
    transform = get_transform_settings(config)
    pagination = get_pagination_settings(config)
    loader = build_loader(transform.eager_load_includes)
    registry = build_registry(loader, FieldPolicy(viewer))
    return ApiContext(
        fractalizer=Fractalizer(registry, max_depth=transform.max_depth),
        loader=loader,
        transform=transform,
        pagination=pagination,
    )
