"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AccountLockedError,
    AccountsError,
    ExternalServiceError,
    InconsistentStateError,
    NotFoundError,
    TooManyAttemptsError,
    ValidationError,
)


class TestAccountsError:
    def test_accounts_error_message(self):
        """AccountsError should store message."""
        error = AccountsError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_accounts_error_default_code(self):
        """AccountsError should default code to class name."""
        error = AccountsError("Test error")
        assert error.code == "AccountsError"

    def test_accounts_error_custom_code(self):
        error = AccountsError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_accounts_error_default_details(self):
        error = AccountsError("Test error")
        assert error.details == {}

    def test_accounts_error_to_dict(self):
        """AccountsError should convert to dict."""
        error = AccountsError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestValidationError:
    def test_default_code(self):
        error = ValidationError("Bad input")
        assert error.code == "VALIDATION_ERROR"

    def test_field_recorded_in_details(self):
        """The offending field should be available both ways."""
        error = ValidationError("Too short", field="password")
        assert error.field == "password"
        assert error.details["field"] == "password"


class TestGenericMessages:
    def test_too_many_attempts_is_generic(self):
        """Rate limit errors should not disclose budgets."""
        error = TooManyAttemptsError()
        assert error.message == "Too many attempts, please try again later"
        assert error.code == "TOO_MANY_ATTEMPTS"
        assert error.details == {}

    def test_account_locked(self):
        error = AccountLockedError()
        assert error.code == "ACCOUNT_LOCKED"
        assert "locked" in error.message


class TestExternalServiceError:
    def test_service_in_details(self):
        error = ExternalServiceError("Down", service="supabase_auth")
        assert error.service == "supabase_auth"
        assert error.details["service"] == "supabase_auth"
        assert error.code == "SERVICE_UNAVAILABLE"


class TestInconsistentStateError:
    def test_code(self):
        error = InconsistentStateError("Stores disagree", details={"user_id": "u1"})
        assert error.code == "INCONSISTENT_STATE"
        assert error.details == {"user_id": "u1"}


class TestInheritance:
    def test_all_inherit_from_accounts_error(self):
        for error in (
            ValidationError("x"),
            NotFoundError("x"),
            TooManyAttemptsError(),
            AccountLockedError(),
            ExternalServiceError("x", service="s"),
        ):
            assert isinstance(error, AccountsError)
