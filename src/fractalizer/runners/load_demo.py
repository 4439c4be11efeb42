from pathlib import Path
from typing import Any, Dict

from fractalizer.config.loader import get_storage_path, load_config_or_default
from fractalizer.database.sqlite_client import session_context
from fractalizer.ingestion.fixture_loader import load_fixture
from fractalizer.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FIXTURE = Path("config/demo_blog.yaml")


def main(fixture: Path | None = None, config: Dict[str, Any] | None = None) -> Dict[str, int]:
    """
    Load the demo blog (users, posts, comments) from YAML into SQLite.
    
    Reads paths from fractalizer.config.yaml or uses defaults.
    """
    if config is None:
        config = load_config_or_default()
    demo_config = config.get("demo") or {}
    fixture_path = fixture or Path(demo_config.get("fixture", DEFAULT_FIXTURE))
    sqlite_path = get_storage_path(config)
    
    with session_context(sqlite_path) as session:
        counts = load_fixture(fixture_path, session)
    
    print(f"Loaded {counts['users']} users, {counts['posts']} posts, {counts['comments']} comments")
    logger.info(f"Demo data loaded into {sqlite_path}")
    return counts


if __name__ == "__main__":
    main()
