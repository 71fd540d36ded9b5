"""
Backlink Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- MODEL faults (declarations, associations, record source)
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# MODEL Faults
# ============================================================================

class ModelFault(Fault):
    """Base class for model and association faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        retryable: bool = False,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.MODEL,
            severity=severity,
            retryable=retryable,
            public=public,
            metadata=metadata,
        )


class ConfigurationError(ModelFault):
    """An association was declared with an invalid target or name."""

    def __init__(self, model_name: Optional[str], name: Any, reason: str, **kwargs):
        where = f" on '{model_name}'" if model_name else ""
        super().__init__(
            code="ASSOCIATION_CONFIG_INVALID",
            message=f"Invalid association {name!r}{where}: {reason}",
            severity=Severity.FATAL,
            metadata={
                "model": model_name,
                "association": repr(name),
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )


class UnsupportedRelationError(ModelFault):
    """A resolved instance does not support the relation it was asked to carry."""

    def __init__(self, model_name: str, relation: str, reason: str, **kwargs):
        super().__init__(
            code="ASSOCIATION_UNSUPPORTED",
            message=f"'{model_name}' does not support relation '{relation}': {reason}",
            metadata={
                "model": model_name,
                "relation": relation,
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )


class ModelNotFoundFault(ModelFault):
    """Model not found in registry."""

    def __init__(self, model_name: str, **kwargs):
        super().__init__(
            code="MODEL_NOT_FOUND",
            message=f"Model '{model_name}' not found in ModelRegistry",
            metadata={"model": model_name, **kwargs.get("metadata", {})},
        )


class SourceNotConfiguredFault(ModelFault):
    """No record source has been installed for a model query."""

    def __init__(self, model_name: str, **kwargs):
        super().__init__(
            code="SOURCE_NOT_CONFIGURED",
            message=f"No record source configured for '{model_name}'",
            severity=Severity.FATAL,
            metadata={"model": model_name, **kwargs.get("metadata", {})},
        )
