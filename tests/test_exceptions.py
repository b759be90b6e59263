"""Tests for custom exception hierarchy."""

from estate_ledger.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    EstateLedgerError,
    InvalidEntityStateError,
    PermissionDeniedError,
    ReferentialIntegrityError,
    SinkError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_estate_ledger_error_is_exception(self) -> None:
        assert isinstance(EstateLedgerError("test"), Exception)

    def test_entity_not_found_is_estate_ledger_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), EstateLedgerError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, EstateLedgerError)

    def test_invalid_entity_state_is_estate_ledger_error(self) -> None:
        assert isinstance(InvalidEntityStateError("test"), EstateLedgerError)

    def test_validation_error_is_estate_ledger_error(self) -> None:
        assert isinstance(ValidationError("test"), EstateLedgerError)

    def test_validation_error_is_not_builtin_value_error(self) -> None:
        assert not isinstance(ValidationError("test"), ValueError)

    def test_permission_denied_is_estate_ledger_error(self) -> None:
        assert isinstance(PermissionDeniedError("test"), EstateLedgerError)

    def test_configuration_error_is_estate_ledger_error(self) -> None:
        assert isinstance(ConfigurationError("test"), EstateLedgerError)

    def test_sink_error_is_estate_ledger_error(self) -> None:
        assert isinstance(SinkError("test"), EstateLedgerError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Tenant ten-001 not found")
        assert str(err) == "Tenant ten-001 not found"
