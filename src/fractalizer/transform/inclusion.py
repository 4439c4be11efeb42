"""Parse client include selections (``with=author,comments.author``) into a tree."""

import re
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import MalformedSelectionError

DEFAULT_INCLUDE_PARAM = "with"

_SEGMENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class InclusionTree:
    """
    Ordered prefix tree of requested include paths.

    Children keep first-seen order, so ``comments,author`` resolves
    ``comments`` before ``author``. An empty tree means "no includes".
    """

    __slots__ = ("_children",)

    def __init__(self) -> None:
        self._children: Dict[str, "InclusionTree"] = {}

    def add_path(self, segments: List[str]) -> None:
        node = self
        for segment in segments:
            node = node._children.setdefault(segment, InclusionTree())

    def names(self) -> List[str]:
        return list(self._children)

    def subtree(self, name: str) -> "InclusionTree":
        """Return the requested includes beneath ``name`` (empty if none)."""
        return self._children.get(name) or InclusionTree()

    def items(self) -> Iterator[Tuple[str, "InclusionTree"]]:
        return iter(self._children.items())

    def depth(self) -> int:
        if not self._children:
            return 0
        return 1 + max(child.depth() for child in self._children.values())

    def paths(self) -> List[str]:
        """Leaf paths in first-seen order, dotted (``comments.author``)."""
        out: List[str] = []
        for name, child in self._children.items():
            if not child:
                out.append(name)
                continue
            out.extend(f"{name}.{path}" for path in child.paths())
        return out

    def serialize(self) -> str:
        return ",".join(self.paths())

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __bool__(self) -> bool:
        return bool(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InclusionTree):
            return NotImplemented
        return list(self._children.items()) == list(other._children.items())

    def __repr__(self) -> str:
        return f"InclusionTree({self.serialize()!r})"


def parse_includes(selection: Optional[str]) -> InclusionTree:
    """
    Parse a comma-separated list of dot-separated include paths.

    Args:
        selection: Raw selection string, e.g. "author,comments.author". None or
            blank means no includes.

    Returns:
        InclusionTree with shared prefixes merged and duplicates collapsed

    Raises:
        MalformedSelectionError: On empty paths, empty segments or invalid names
    """
    tree = InclusionTree()
    if selection is None or not selection.strip():
        return tree

    for raw_path in selection.split(","):
        if not raw_path.strip():
            raise MalformedSelectionError(selection, "empty include path")
        segments = [segment.strip() for segment in raw_path.split(".")]
        for segment in segments:
            if not segment:
                raise MalformedSelectionError(selection, f"empty segment in '{raw_path.strip()}'")
            if not _SEGMENT_RE.match(segment):
                raise MalformedSelectionError(selection, f"invalid include name '{segment}'")
        tree.add_path(segments)
    return tree


def includes_from_params(
    params: Mapping[str, object],
    param_name: str = DEFAULT_INCLUDE_PARAM,
) -> InclusionTree:
    """
    Read the include selection out of request query parameters.

    Repeated parameters (``?with=author&with=comments``) arrive as lists and
    are joined as if comma-separated.
    """
    value = params.get(param_name)
    if value is None:
        return InclusionTree()
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return parse_includes(str(value))
