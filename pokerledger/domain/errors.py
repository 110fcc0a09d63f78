from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when settlement input data is structurally invalid."""
