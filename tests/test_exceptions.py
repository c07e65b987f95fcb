"""
Tests for custom exceptions
"""
import pytest

from core_algolia.exceptions import (
    EXCEPTION_HIERARCHY,
    AlgoliaError,
    AlgoliaHTTPError,
    AlgoliaUnreachableError,
    ConfigurationError,
    InvalidObjectIDError,
    MissingAPIKeyError,
    MissingApplicationIDError,
    ValidationError,
)


class TestExceptions:
    """Test custom exceptions"""

    def test_algolia_error(self):
        error = AlgoliaError("Test error")
        assert str(error) == "Test error"
        assert isinstance(error, Exception)

    def test_algolia_error_with_original(self):
        error = AlgoliaError("Test error", ValueError("boom"))
        assert str(error) == "Test error (Original: boom)"

    def test_configuration_errors(self):
        assert str(ConfigurationError("bad")) == "Configuration error: bad"
        assert isinstance(MissingApplicationIDError(), ConfigurationError)
        assert "ALGOLIA_APPLICATION_ID" in str(MissingApplicationIDError())

    def test_validation_error(self):
        error = ValidationError("must not be empty", "filters")
        assert str(error) == "Validation error: Invalid value for 'filters': must not be empty"
        assert error.field == "filters"

    def test_invalid_object_id_error(self):
        error = InvalidObjectIDError()
        assert isinstance(error, ValidationError)
        assert "The ObjectID cannot be an empty string" in str(error)

    def test_http_error(self):
        error = AlgoliaHTTPError(404, '{"message":"Index does not exist"}')
        assert error.status_code == 404
        assert str(error).startswith("HTTP 404")

    def test_unreachable_error(self):
        error = AlgoliaUnreachableError("Unable to connect to Algolia", 4)
        assert error.attempts == 4
        assert str(error) == "Unable to connect to Algolia after 4 attempts"

    @pytest.mark.parametrize(
        "parent,children",
        list(EXCEPTION_HIERARCHY.items()),
    )
    def test_hierarchy(self, parent, children):
        for child in children:
            assert issubclass(child, parent)

    def test_exception_chaining(self):
        try:
            raise ValueError("Original error")
        except ValueError as e:
            try:
                raise AlgoliaError("Algolia error") from e
            except AlgoliaError as algolia_error:
                assert algolia_error.__cause__ is e
