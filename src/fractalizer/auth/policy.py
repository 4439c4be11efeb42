"""Field visibility: decides which restricted fields a viewer may see.

Transformers consult a policy while building their field mapping and simply
leave out what the viewer may not see. The policy never raises and never
changes resolution; an omitted field looks exactly like an absent one.
"""

from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel


class Viewer(BaseModel):
    """The caller on whose behalf resources are being rendered."""
    user_id: Optional[int] = None
    is_admin: bool = False


ANONYMOUS = Viewer()


class FieldPolicy:
    """
    Owner-or-admin visibility for restricted fields.

    Args:
        viewer: Caller identity (anonymous when omitted)
        restricted: kind -> field names that only owners and admins may see
    """

    DEFAULT_RESTRICTED: Dict[str, FrozenSet[str]] = {
        "user": frozenset({"email"}),
    }

    def __init__(self, viewer: Optional[Viewer] = None, restricted: Optional[Dict[str, FrozenSet[str]]] = None):
        self.viewer = viewer or ANONYMOUS
        self.restricted = self.DEFAULT_RESTRICTED if restricted is None else restricted

    def can_view(self, kind: str, field: str, owner_id: Any = None) -> bool:
        if field not in self.restricted.get(kind, frozenset()):
            return True
        if self.viewer.is_admin:
            return True
        return self.viewer.user_id is not None and self.viewer.user_id == owner_id

    def filter(self, kind: str, fields: Dict[str, Any], owner_id: Any = None) -> Dict[str, Any]:
        """Drop fields the viewer may not see, keeping order."""
        return {k: v for k, v in fields.items() if self.can_view(kind, k, owner_id)}
