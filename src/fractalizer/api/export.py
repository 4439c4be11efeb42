"""Export API: render resource envelopes as JSON for external consumption."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from .context import ApiContext
from .posts_api import get_post, list_posts
from .users_api import get_user, list_users

RESOURCES = ("posts", "users")


def render_json(envelope: Dict[str, Any]) -> str:
    # No sort_keys: field order is part of the output contract
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def fetch_resource(
    session: Session,
    ctx: ApiContext,
    resource: str,
    resource_id: Optional[int] = None,
    includes: Optional[str] = None,
    page: int = 1,
    per_page: Optional[int] = None,
) -> Optional[Dict[str, Any]]:
    """
    Fetch one resource (when resource_id is given) or a page of them.

    Returns:
        Envelope dict, or None if a single resource was not found

    Raises:
        ValueError: If resource is not one of RESOURCES
    """
    if resource == "posts":
        if resource_id is not None:
            return get_post(session, ctx, resource_id, includes=includes)
        return list_posts(session, ctx, includes=includes, page=page, per_page=per_page)
    if resource == "users":
        if resource_id is not None:
            return get_user(session, ctx, resource_id, includes=includes)
        return list_users(session, ctx, includes=includes, page=page, per_page=per_page)
    raise ValueError(f"Unsupported resource: {resource}")


def export_resource(
    session: Session,
    ctx: ApiContext,
    resource: str,
    resource_id: Optional[int] = None,
    includes: Optional[str] = None,
    page: int = 1,
    per_page: Optional[int] = None,
    out: Path | None = None,
) -> Optional[str]:
    """
    Export a resource envelope as JSON.

    Args:
        session: SQLAlchemy session
        ctx: API context
        resource: "posts" or "users"
        resource_id: Single resource ID, or None for a collection page
        includes: Include selection
        page: 1-based page number (collections only)
        per_page: Page size (collections only)
        out: Output file path (if None, returns the JSON text)

    Returns:
        JSON text, a confirmation message when written to file, or None if not found
    """
    envelope = fetch_resource(
        session,
        ctx,
        resource,
        resource_id=resource_id,
        includes=includes,
        page=page,
        per_page=per_page,
    )
    if envelope is None:
        return None

    output = render_json(envelope)
    if out:
        out.write_text(output + "\n", encoding="utf-8")
        return f"Exported to {out}"
    return output
