from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from sqlalchemy.orm import Session

from ..database.schema import Comment, Post, User
from ..utils.logging import get_logger
from ..utils.time import parse_utc, to_utc_z

logger = get_logger(__name__)


def _utc_or_none(value: Optional[Any]) -> Optional[str]:
    if value is None or value == "":
        return None
    return to_utc_z(parse_utc(str(value)))


def read_fixture(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read a demo fixture (users, posts, comments) from YAML.
    
    Raises:
        FileNotFoundError: If the fixture doesn't exist
        ValueError: If the structure is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    
    if not isinstance(data, dict):
        raise ValueError("Fixture must be a dictionary")
    for section in ("users", "posts", "comments"):
        rows = data.get(section) or []
        if not isinstance(rows, list):
            raise ValueError(f"Fixture '{section}' must be a list")
        for row in rows:
            if not isinstance(row, dict) or "id" not in row:
                raise ValueError(f"Every entry in '{section}' must be a dictionary with an 'id'")
        data[section] = rows
    return data


def load_users(rows: List[Dict[str, Any]], session: Session) -> int:
    for row in rows:
        session.merge(User(
            id=int(row["id"]),
            name=str(row.get("name", "")).strip(),
            email=str(row.get("email", "")).strip(),
            is_admin=bool(row.get("is_admin", False)),
        ))
    return len(rows)


def load_posts(rows: List[Dict[str, Any]], session: Session) -> int:
    for row in rows:
        session.merge(Post(
            id=int(row["id"]),
            slug=str(row["slug"]).strip(),
            title=str(row.get("title", "")).strip(),
            body=row.get("body"),
            author_id=int(row["author_id"]),
            published_at_utc=_utc_or_none(row.get("published_at")),
        ))
    return len(rows)


def load_comments(rows: List[Dict[str, Any]], session: Session) -> int:
    for row in rows:
        session.merge(Comment(
            id=int(row["id"]),
            post_id=int(row["post_id"]),
            author_id=int(row["author_id"]),
            body=str(row.get("body", "")),
            created_at_utc=_utc_or_none(row.get("created_at")),
        ))
    return len(rows)


def load_fixture(path: Path, session: Session) -> Dict[str, int]:
    """
    Load a demo fixture into the database (idempotent: rows are merged by id).
    
    Returns:
        Counts per table: {"users": n, "posts": n, "comments": n}
    """
    data = read_fixture(path)
    counts = {
        "users": load_users(data["users"], session),
        "posts": load_posts(data["posts"], session),
        "comments": load_comments(data["comments"], session),
    }
    session.commit()
    logger.info(f"Loaded fixture {path}: {counts}")
    return counts
