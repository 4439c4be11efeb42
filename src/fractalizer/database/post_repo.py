"""Repository functions for post queries."""

from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..database.schema import Post


def count_posts(session: Session, published_only: bool = False) -> int:
    q = session.query(Post)
    if published_only:
        q = q.filter(Post.published_at_utc.isnot(None))
    return q.count()


def list_posts(
    session: Session,
    *,
    limit: int = 15,
    offset: int = 0,
    published_only: bool = False,
    options: Iterable[Any] = (),
) -> List[Post]:
    """
    List posts in canonical order (id ascending).
    
    Args:
        session: SQLAlchemy session
        limit: Maximum number of posts to return
        offset: Number of posts to skip
        published_only: Exclude drafts (posts without published_at_utc)
        options: Loader options (e.g. selectinload chains for eager includes)
        
    Returns:
        List of Post rows
    """
    q = session.query(Post)
    if published_only:
        q = q.filter(Post.published_at_utc.isnot(None))
    options = list(options)
    if options:
        q = q.options(*options)
    return q.order_by(Post.id.asc()).offset(offset).limit(limit).all()


def find_post(session: Session, post_id: int, options: Iterable[Any] = ()) -> Optional[Post]:
    q = session.query(Post).filter(Post.id == post_id)
    options = list(options)
    if options:
        q = q.options(*options)
    return q.one_or_none()


def find_post_by_slug(session: Session, slug: str, options: Iterable[Any] = ()) -> Optional[Post]:
    q = session.query(Post).filter(Post.slug == slug)
    options = list(options)
    if options:
        q = q.options(*options)
    return q.one_or_none()
