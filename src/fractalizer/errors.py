"""Error taxonomy for resource transformation.

Client errors (``client_error = True``) are caused by the request, either its
selection expression or its paging parameters, and are safe to echo back to
the caller. Everything else is a misconfiguration or programming error and
should fail loudly.
"""

from typing import Any, Dict, Iterable, Optional


class FractalizerError(Exception):
    """Base class for every error raised by the transformation layer."""

    code = "fractalizer_error"
    client_error = False

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "message": str(self)}}


class TransformerConfigError(FractalizerError):
    """A transformer or registry is wired up incorrectly."""

    code = "transformer_config"


class UnknownKindError(FractalizerError, LookupError):
    """No transformer is registered for an entity kind."""

    code = "unknown_kind"

    def __init__(self, kind: str, registered: Optional[Iterable[str]] = None):
        self.kind = kind
        self.registered = list(registered or [])
        message = f"No transformer registered for kind '{kind}'"
        if self.registered:
            message += f" (registered: {', '.join(self.registered)})"
        super().__init__(message)


class MalformedSelectionError(FractalizerError, ValueError):
    """The client's include selection string cannot be parsed."""

    code = "malformed_selection"
    client_error = True

    def __init__(self, selection: str, reason: str):
        self.selection = selection
        self.reason = reason
        super().__init__(f"Malformed include selection '{selection}': {reason}")


class UndeclaredIncludeError(FractalizerError):
    """A requested include is not declared by the transformer for that level."""

    code = "undeclared_include"
    client_error = True

    def __init__(self, kind: str, include: str, available: Iterable[str] = (), path: str = ""):
        self.kind = kind
        self.include = include
        self.available = list(available)
        self.path = path or include
        available_text = ", ".join(self.available) if self.available else "none"
        super().__init__(
            f"Include '{self.path}' is not available on '{kind}' (available: {available_text})"
        )


class MaxDepthExceededError(FractalizerError):
    """The include tree or relation graph is nested deeper than allowed."""

    code = "max_depth_exceeded"
    client_error = True

    def __init__(self, depth: int, max_depth: int, path: str = ""):
        self.depth = depth
        self.max_depth = max_depth
        self.path = path
        message = f"Include depth {depth} exceeds maximum of {max_depth}"
        if path:
            message += f" at '{path}'"
        super().__init__(message)


class InvalidPaginationError(FractalizerError, ValueError):
    """The requested page or page size is out of range."""

    code = "invalid_pagination"
    client_error = True

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
