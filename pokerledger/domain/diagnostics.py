from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Diagnostic:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": dict(self.details)}


def report(
    diagnostics: list[Diagnostic] | None,
    logger: logging.Logger,
    *,
    code: str,
    message: str,
    **details: Any,
) -> Diagnostic:
    """Record a non-fatal problem; the computation carries on."""
    diagnostic = Diagnostic(code=code, message=message, details=details)
    if diagnostics is not None:
        diagnostics.append(diagnostic)
    logger.warning(message, extra={"diagnostic_code": code})
    return diagnostic
