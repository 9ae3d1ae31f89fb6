"""Generator exceptions."""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for declaration generation failures."""


class UnsupportedKindError(GenerationError):
    """A method is attached to a symbol kind that cannot declare methods."""

    def __init__(self, kind: str, method_full_name: str) -> None:
        super().__init__(f"Symbol kind '{kind}' cannot have methods ({method_full_name})")
        self.kind = kind
        self.method_full_name = method_full_name


class PhaseError(GenerationError):
    """Generation phases were used out of order."""
