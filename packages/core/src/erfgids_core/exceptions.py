"""Custom exceptions for the Erfgids engine.

The report computation itself never raises on user input: bad facts are
clamped by the models and limitations are surfaced as ``NotComputed``
entries. The exceptions below are reserved for the edges of the system,
such as a malformed bracket table shipped with the code or an unreadable
dossier document handed to the export layer.

Example:
    try:
        facts = load_facts(raw_json)
    except ValidationError as e:
        logger.error("dossier_rejected", error=str(e), **e.details)
        raise
    except ErfgidsError as e:
        # Handle any Erfgids-related error
        logger.error(f"Operation failed: {e}")
"""

from typing import Any, Optional


class ErfgidsError(Exception):
    """Base exception for all Erfgids errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise ErfgidsError("Something went wrong", details={"code": 500})
        ErfgidsError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ErfgidsError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error is potentially recoverable through
                correction of the input. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(ErfgidsError):
    """Error raised when a facts or dossier document cannot be read.

    Individual field values are never rejected (they are clamped), but a
    document that is not a mapping at all cannot be turned into facts.

    Attributes:
        field: The field or document part that failed validation.
        value: The offending value (if safe to include).
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Facts document must be a JSON object",
        ...     field="facts",
        ...     constraint="object",
        ... )
        ValidationError: Facts document must be a JSON object
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(ErfgidsError):
    """Error raised when static tables or settings are invalid.

    Raised for problems that ship with the code or the deployment, such as
    a bracket table whose bounds are not ascending or a request for a table
    name that does not exist. These are not recoverable at runtime.

    Attributes:
        config_key: The configuration key or table name that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown bracket table",
        ...     config_key="bracket_table",
        ...     expected="direct_line or spouse_partner_donation",
        ...     actual="siblings",
        ... )
        ConfigurationError: Unknown bracket table
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed at runtime.
                Defaults to False.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "ErfgidsError",
    "ValidationError",
    "ConfigurationError",
]
