"""Posts API: canonical query surface for post resources."""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..database import post_repo
from .context import ApiContext

KIND = "post"


def list_posts(
    session: Session,
    ctx: ApiContext,
    includes: Optional[str] = None,
    page: int = 1,
    per_page: Optional[int] = None,
    published_only: bool = False,
) -> Dict[str, Any]:
    """
    List posts as a paginated collection envelope.
    
    Args:
        session: SQLAlchemy session
        ctx: API context (fractalizer, loader strategy, settings)
        includes: Include selection, e.g. "author,comments.author"
        page: 1-based page number
        per_page: Page size (clamped to max_per_page; config default if None)
        published_only: Exclude drafts
        
    Returns:
        {"data": [...], "meta": {"pagination": {...}}}
        
    Raises:
        InvalidPaginationError, MalformedSelectionError, UndeclaredIncludeError,
        MaxDepthExceededError: Before any row is queried
    """
    params = ctx.list_params(page, per_page)
    tree = ctx.prepare(KIND, includes)
    page = params.page
    per_page = ctx.per_page(params.per_page)
    
    total = post_repo.count_posts(session, published_only=published_only)
    rows = post_repo.list_posts(
        session,
        limit=per_page,
        offset=(page - 1) * per_page,
        published_only=published_only,
        options=ctx.query_options(KIND, tree),
    )
    
    paginator = ctx.paginator("/posts", tree, total=total, count=len(rows), page=page, per_page=per_page)
    return ctx.fractalizer.collection(rows, KIND, tree, paginator)


def get_post(
    session: Session,
    ctx: ApiContext,
    post_id: int,
    includes: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Get a single post as an item envelope.
    
    Returns:
        {"data": {...}} or None if not found
    """
    tree = ctx.prepare(KIND, includes)
    post = post_repo.find_post(session, post_id, options=ctx.query_options(KIND, tree))
    if post is None:
        return None
    return ctx.fractalizer.item(post, KIND, tree)


def get_post_by_slug(
    session: Session,
    ctx: ApiContext,
    slug: str,
    includes: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    tree = ctx.prepare(KIND, includes)
    post = post_repo.find_post_by_slug(session, slug, options=ctx.query_options(KIND, tree))
    if post is None:
        return None
    return ctx.fractalizer.item(post, KIND, tree)
