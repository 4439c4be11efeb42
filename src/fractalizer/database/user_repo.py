"""Repository functions for user queries."""

from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..database.schema import User


def count_users(session: Session) -> int:
    return session.query(User).count()


def list_users(
    session: Session,
    *,
    limit: int = 15,
    offset: int = 0,
    options: Iterable[Any] = (),
) -> List[User]:
    """List users in canonical order (id ascending)."""
    q = session.query(User)
    options = list(options)
    if options:
        q = q.options(*options)
    return q.order_by(User.id.asc()).offset(offset).limit(limit).all()


def find_user(session: Session, user_id: int, options: Iterable[Any] = ()) -> Optional[User]:
    q = session.query(User).filter(User.id == user_id)
    options = list(options)
    if options:
        q = q.options(*options)
    return q.one_or_none()
