from typing import Any, Dict, Optional

from ..auth.policy import FieldPolicy
from ..database.schema import User
from ..transform.base import Include, Transformer
from ..transform.loading import RelationLoader


class UserTransformer(Transformer):
    """Users; ``email`` is only shown to the user themself or an admin."""

    kind = "user"
    model = User
    available_includes = {
        "posts": Include.collection("post"),
        "comments": Include.collection("comment"),
    }

    def __init__(self, loader: Optional[RelationLoader] = None, policy: Optional[FieldPolicy] = None):
        super().__init__(loader)
        self.policy = policy or FieldPolicy()

    def transform(self, user: User) -> Dict[str, Any]:
        fields = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
        }
        return self.policy.filter(self.kind, fields, owner_id=user.id)
