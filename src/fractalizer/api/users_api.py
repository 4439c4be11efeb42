"""Users API: canonical query surface for user resources."""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..database import user_repo
from .context import ApiContext

KIND = "user"


def list_users(
    session: Session,
    ctx: ApiContext,
    includes: Optional[str] = None,
    page: int = 1,
    per_page: Optional[int] = None,
) -> Dict[str, Any]:
    """List users as a paginated collection envelope."""
    params = ctx.list_params(page, per_page)
    tree = ctx.prepare(KIND, includes)
    page = params.page
    per_page = ctx.per_page(params.per_page)
    
    total = user_repo.count_users(session)
    rows = user_repo.list_users(
        session,
        limit=per_page,
        offset=(page - 1) * per_page,
        options=ctx.query_options(KIND, tree),
    )
    
    paginator = ctx.paginator("/users", tree, total=total, count=len(rows), page=page, per_page=per_page)
    return ctx.fractalizer.collection(rows, KIND, tree, paginator)


def get_user(
    session: Session,
    ctx: ApiContext,
    user_id: int,
    includes: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Get a single user as an item envelope, or None if not found."""
    tree = ctx.prepare(KIND, includes)
    user = user_repo.find_user(session, user_id, options=ctx.query_options(KIND, tree))
    if user is None:
        return None
    return ctx.fractalizer.item(user, KIND, tree)
