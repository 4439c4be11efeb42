"""Transformer registry: maps entity kinds to their transformers."""

from typing import Dict, List

from ..errors import TransformerConfigError, UnknownKindError
from ..utils.logging import get_logger
from .base import Transformer

logger = get_logger(__name__)


class TransformerRegistry:
    """Kind -> transformer lookup, filled once at startup and read-only afterwards."""

    def __init__(self) -> None:
        self._transformers: Dict[str, Transformer] = {}

    def register(self, kind: str, transformer: Transformer) -> None:
        """
        Register a transformer for an entity kind.

        Raises:
            TransformerConfigError: If the kind is already registered or does not
                match the transformer's declared kind
        """
        if kind in self._transformers:
            raise TransformerConfigError(f"Kind '{kind}' is already registered")
        if transformer.kind != kind:
            raise TransformerConfigError(
                f"{type(transformer).__name__} handles '{transformer.kind}', cannot register it as '{kind}'"
            )
        self._transformers[kind] = transformer
        logger.debug(f"Registered {type(transformer).__name__} for kind '{kind}'")

    def add(self, transformer: Transformer) -> None:
        self.register(transformer.kind, transformer)

    def lookup(self, kind: str) -> Transformer:
        try:
            return self._transformers[kind]
        except KeyError:
            raise UnknownKindError(kind, self._transformers) from None

    def kinds(self) -> List[str]:
        return list(self._transformers)

    def check(self) -> None:
        """
        Verify every declared include points at a registered kind.

        Call once after all transformers are registered so a dangling include
        fails at startup instead of on the first request that asks for it.

        Raises:
            UnknownKindError: If an include targets an unregistered kind
        """
        for kind, transformer in self._transformers.items():
            for name, include in transformer.available_includes.items():
                if include.target not in self._transformers:
                    logger.error(f"Include '{kind}.{name}' targets unregistered kind '{include.target}'")
                    raise UnknownKindError(include.target, self._transformers)
        logger.info(f"Transformer registry ready: {', '.join(self._transformers) or 'empty'}")

    def __contains__(self, kind: object) -> bool:
        return kind in self._transformers

    def __len__(self) -> int:
        return len(self._transformers)
