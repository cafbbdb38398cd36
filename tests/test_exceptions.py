"""Tests for custom exceptions."""

import pytest

from golicense_analyzer.exceptions import (
    AggregateError,
    ClassificationError,
    ClassifierError,
    ConfigurationError,
    LicenseAnalyzerError,
    LicenseLocatorError,
    LicenseURLError,
    NetworkError,
    PackageGraphError,
    RuleError,
    ScanError,
)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    @pytest.mark.parametrize(
        "error_class",
        [
            AggregateError,
            ClassifierError,
            ConfigurationError,
            LicenseLocatorError,
            LicenseURLError,
            NetworkError,
            RuleError,
            ScanError,
        ],
    )
    def test_inherits_from_base(self, error_class: type) -> None:
        """Test that every error derives from LicenseAnalyzerError."""
        assert issubclass(error_class, LicenseAnalyzerError)

    def test_package_graph_error_is_scan_error(self) -> None:
        """Test that PackageGraphError is a ScanError."""
        assert issubclass(PackageGraphError, ScanError)

    def test_classification_error_is_classifier_error(self) -> None:
        """Test that per-file classification errors are classifier errors."""
        assert issubclass(ClassificationError, ClassifierError)


class TestAggregateError:
    """Tests for AggregateError."""

    def test_empty_is_falsy(self) -> None:
        """Test that an aggregate without errors is falsy."""
        errors = AggregateError()
        assert not errors
        assert len(errors) == 0

    def test_single_error_message(self) -> None:
        """Test that a single error keeps its own message."""
        errors = AggregateError([LicenseURLError("remote 'origin' not found")])
        assert str(errors) == "remote 'origin' not found"

    def test_preserves_every_message(self) -> None:
        """Test that all underlying messages are kept, in order."""
        errors = AggregateError()
        errors.append(LicenseURLError("first failure"))
        errors.append(LicenseURLError("second failure"))

        message = str(errors)
        assert message.startswith("2 errors occurred:")
        assert message.index("first failure") < message.index("second failure")
        assert len(errors) == 2

    def test_append_flattens_nested_aggregates(self) -> None:
        """Test that appending an aggregate adds its errors individually."""
        inner = AggregateError([ValueError("a"), ValueError("b")])
        outer = AggregateError([ValueError("c")])
        outer.append(inner)

        assert [str(e) for e in outer.errors] == ["c", "a", "b"]

    def test_can_be_raised_and_caught_as_base(self) -> None:
        """Test that AggregateError is caught as LicenseAnalyzerError."""
        with pytest.raises(LicenseAnalyzerError, match="boom"):
            raise AggregateError([RuleError("boom")])
