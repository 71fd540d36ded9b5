"""
Backlink Faults - typed fault signals.

Every error raised by backlink is a Fault carrying a stable code,
a domain, a severity and structured metadata.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels
- ConfigurationError / UnsupportedRelationError: association faults
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
    DOMAIN_DEFAULTS,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    ModelFault,
    ConfigurationError,
    UnsupportedRelationError,
    ModelNotFoundFault,
    SourceNotConfiguredFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",
    "DOMAIN_DEFAULTS",

    # Config
    "ConfigFault",
    "ConfigInvalidFault",

    # Model
    "ModelFault",
    "ConfigurationError",
    "UnsupportedRelationError",
    "ModelNotFoundFault",
    "SourceNotConfiguredFault",
]
