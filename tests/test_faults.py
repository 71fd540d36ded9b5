"""
Tests for the faults system (faults/).

Tests Fault, FaultDomain, Severity and the association fault types.
"""

import pytest

from backlink.faults import (
    ConfigInvalidFault,
    ConfigurationError,
    DOMAIN_DEFAULTS,
    Fault,
    FaultDomain,
    ModelFault,
    ModelNotFoundFault,
    Severity,
    SourceNotConfiguredFault,
    UnsupportedRelationError,
)


# ============================================================================
# Severity
# ============================================================================

class TestSeverity:

    def test_values(self):
        assert Severity.INFO == "info"
        assert Severity.WARN == "warn"
        assert Severity.ERROR == "error"
        assert Severity.FATAL == "fatal"


# ============================================================================
# FaultDomain
# ============================================================================

class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.CONFIG.name == "config"
        assert FaultDomain.MODEL.name == "model"

    def test_domain_equality(self):
        assert FaultDomain("model") == FaultDomain.MODEL
        assert FaultDomain.MODEL == "model"
        assert FaultDomain.MODEL != FaultDomain.CONFIG
        assert hash(FaultDomain("model")) == hash(FaultDomain.MODEL)

    def test_defaults_cover_standard_domains(self):
        assert DOMAIN_DEFAULTS[FaultDomain.MODEL]["severity"] == Severity.ERROR
        assert DOMAIN_DEFAULTS[FaultDomain.CONFIG]["retryable"] is False


# ============================================================================
# Fault
# ============================================================================

class TestFault:

    def test_requires_code_message_domain(self):
        with pytest.raises(TypeError):
            Fault(code="X", message="y")

    def test_domain_defaults_applied(self):
        fault = Fault(code="X", message="y", domain=FaultDomain.CONFIG)
        assert fault.severity == Severity.FATAL
        assert fault.retryable is False

    def test_custom_domain(self):
        fault = Fault(code="X", message="y", domain=FaultDomain("cms"))
        assert fault.severity == Severity.ERROR
        assert fault.retryable is False

    def test_str_and_repr(self):
        fault = Fault(code="X", message="went wrong", domain=FaultDomain.MODEL)
        assert str(fault) == "[X] went wrong"
        assert repr(fault) == "Fault(code='X', domain=model, severity=error)"

    def test_to_dict(self):
        fault = Fault(
            code="X", message="y", domain=FaultDomain.MODEL, metadata={"k": 1},
        )
        assert fault.to_dict() == {
            "code": "X",
            "message": "y",
            "domain": "model",
            "severity": "error",
            "retryable": False,
            "public": False,
            "metadata": {"k": 1},
        }

    def test_is_exception(self):
        with pytest.raises(Fault):
            raise Fault(code="X", message="y", domain=FaultDomain.MODEL)


# ============================================================================
# Domain faults
# ============================================================================

class TestAssociationFaults:

    def test_configuration_error(self):
        fault = ConfigurationError("Post", "category.name", "not atomic")
        assert isinstance(fault, ModelFault)
        assert fault.code == "ASSOCIATION_CONFIG_INVALID"
        assert fault.severity == Severity.FATAL
        assert fault.message == "Invalid association 'category.name' on 'Post': not atomic"
        assert fault.metadata["association"] == "'category.name'"

    def test_configuration_error_without_model(self):
        fault = ConfigurationError(None, 42, "bad")
        assert fault.message == "Invalid association 42: bad"

    def test_unsupported_relation(self):
        fault = UnsupportedRelationError("Tag", "post", "no back-reference")
        assert fault.domain == FaultDomain.MODEL
        assert fault.severity == Severity.ERROR
        assert fault.metadata == {
            "model": "Tag", "relation": "post", "reason": "no back-reference",
        }

    def test_model_not_found(self):
        fault = ModelNotFoundFault("gadgets", metadata={"association": "x"})
        assert fault.code == "MODEL_NOT_FOUND"
        assert fault.metadata == {"model": "gadgets", "association": "x"}

    def test_source_not_configured(self):
        fault = SourceNotConfiguredFault("Post")
        assert fault.code == "SOURCE_NOT_CONFIGURED"
        assert fault.severity == Severity.FATAL

    def test_config_invalid(self):
        fault = ConfigInvalidFault("log_level", "unknown")
        assert fault.domain == FaultDomain.CONFIG
        assert fault.message == "Configuration key 'log_level' is invalid: unknown"
