from typing import Any, Dict

from ..database.schema import Comment
from ..transform.base import Include, Transformer


class CommentTransformer(Transformer):
    kind = "comment"
    model = Comment
    available_includes = {
        "author": Include.item("user"),
        "post": Include.item("post"),
    }

    def transform(self, comment: Comment) -> Dict[str, Any]:
        return {
            "id": comment.id,
            "body": comment.body,
            "created_at": comment.created_at_utc,
        }
