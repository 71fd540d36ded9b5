"""
Backlink Faults - base fault type, domains and severities.

A fault is an exception that also carries a stable code and enough
structure to be logged or serialized without parsing its message.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """How bad a fault is for the caller."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"    # declaration or setup is broken, nothing can proceed


class FaultDomain:
    """
    The part of backlink a fault comes from.

    Compares equal to other domains and to plain strings by name.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return self.name == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


FaultDomain.CONFIG = FaultDomain("config", "Settings loading and validation")
FaultDomain.MODEL = FaultDomain("model", "Model declarations, associations and record sources")


DOMAIN_DEFAULTS = {
    FaultDomain.CONFIG: {"severity": Severity.FATAL, "retryable": False},
    FaultDomain.MODEL: {"severity": Severity.ERROR, "retryable": False},
}


class Fault(Exception):
    """
    Base class for every backlink error.

    Attributes:
        code: Stable identifier, e.g. "ASSOCIATION_UNSUPPORTED"
        message: Human-readable summary
        domain: FaultDomain the fault belongs to
        severity: Falls back to the domain default
        retryable: Falls back to the domain default
        public: Whether the message may be shown to end users
        metadata: Structured context (model, association, key...)
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        retryable: Optional[bool] = None,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        # Subclasses may declare code/message/domain as class attributes
        self.code = code or getattr(type(self), "code", None)
        self.message = message or getattr(type(self), "message", None)
        self.domain = domain or getattr(type(self), "domain", None)
        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{type(self).__name__} needs a code, a message and a domain")

        super().__init__(self.message)

        defaults = DOMAIN_DEFAULTS.get(self.domain, {"severity": Severity.ERROR, "retryable": False})
        self.severity = severity or defaults["severity"]
        self.retryable = defaults["retryable"] if retryable is None else retryable
        self.public = public
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, domain={self.domain.value}, "
            f"severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "public": self.public,
            "metadata": self.metadata,
        }
