"""Transformers for the blog resources (users, posts, comments)."""

from typing import Optional

from ..auth.policy import FieldPolicy
from ..transform.loading import LazyRelationLoader, RelationLoader
from ..transform.registry import TransformerRegistry
from .comment import CommentTransformer
from .post import PostTransformer
from .user import UserTransformer


def build_registry(
    loader: Optional[RelationLoader] = None,
    policy: Optional[FieldPolicy] = None,
) -> TransformerRegistry:
    """
    Build a registry with every blog transformer wired to the same collaborators.

    Args:
        loader: Relation loading strategy shared by all transformers (lazy by default)
        policy: Field visibility policy (anonymous viewer by default)

    Returns:
        Checked TransformerRegistry
    """
    loader = loader or LazyRelationLoader()
    registry = TransformerRegistry()
    registry.add(UserTransformer(loader, policy))
    registry.add(PostTransformer(loader))
    registry.add(CommentTransformer(loader))
    registry.check()
    return registry


__all__ = ["CommentTransformer", "PostTransformer", "UserTransformer", "build_registry"]
