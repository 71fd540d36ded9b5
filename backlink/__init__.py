"""
Backlink - two-way model associations for one-way content APIs.

Headless content sources link a child record to its parent but never the
other way round. Backlink lets model classes declare has_many, has_one,
belongs_to and belongs_to_many associations and resolves the missing
direction when an accessor is called.
"""

__version__ = "0.1.0"

from .config import BacklinkConfig, ConfigLoader, configure
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    ConfigurationError,
    UnsupportedRelationError,
    ModelNotFoundFault,
    SourceNotConfiguredFault,
)
from .models import (
    Model,
    ModelRegistry,
    Capability,
    HasMany,
    HasOne,
    BelongsTo,
    BelongsToMany,
    has_many,
    has_one,
    belongs_to,
    belongs_to_many,
    MemorySource,
    Query,
    RecordSource,
)

__all__ = [
    "__version__",
    # Config
    "BacklinkConfig",
    "ConfigLoader",
    "configure",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigurationError",
    "UnsupportedRelationError",
    "ModelNotFoundFault",
    "SourceNotConfiguredFault",
    # Models
    "Model",
    "ModelRegistry",
    "Capability",
    "HasMany",
    "HasOne",
    "BelongsTo",
    "BelongsToMany",
    "has_many",
    "has_one",
    "belongs_to",
    "belongs_to_many",
    "MemorySource",
    "Query",
    "RecordSource",
]
