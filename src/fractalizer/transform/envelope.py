"""Output assembler: wraps resolved nodes in the ``data``/``meta`` envelope."""

from typing import Any, Dict, List, Optional, Protocol


class PaginationSource(Protocol):
    """Anything that can describe the page a collection came from."""

    def to_meta(self) -> Dict[str, Any]:
        ...


def wrap(node: Any) -> Dict[str, Any]:
    """One-level ``{"data": ...}`` wrapper used for embedded relations."""
    return {"data": node}


def item_envelope(node: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return wrap(node)


def collection_envelope(
    nodes: List[Dict[str, Any]],
    pagination: Optional[PaginationSource] = None,
) -> Dict[str, Any]:
    """
    Wrap a resolved collection, attaching pagination metadata when provided.

    Args:
        nodes: Resolved nodes in output order
        pagination: Optional pagination collaborator

    Returns:
        {"data": [...]} or {"data": [...], "meta": {"pagination": {...}}}
    """
    envelope = wrap(list(nodes))
    if pagination is not None:
        envelope["meta"] = {"pagination": pagination.to_meta()}
    return envelope
