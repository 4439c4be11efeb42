from typing import Any, Dict

from ..database.schema import Post
from ..transform.base import Include, Transformer


class PostTransformer(Transformer):
    kind = "post"
    model = Post
    available_includes = {
        "author": Include.item("user"),
        "comments": Include.collection("comment"),
    }

    def transform(self, post: Post) -> Dict[str, Any]:
        return {
            "id": post.id,
            "slug": post.slug,
            "title": post.title,
            "body": post.body,
            "published_at": post.published_at_utc,
        }
