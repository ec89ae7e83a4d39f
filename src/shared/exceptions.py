"""Exception hierarchy for recoverable, caller-visible failures.

Only conditions the caller is expected to act on get an exception type here.
A face that does not match is a normal verification result and a fraud-rule
failure is a normal verdict, so neither appears below.
"""

from typing import Any


class BioPayError(Exception):
    """Base class for all biopay-guard errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    context : dict, optional
        Additional context about the failure.
    error_code : str, optional
        Stable code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.error_code = error_code
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]

        if self.error_code:
            parts.append(f"[Error Code: {self.error_code}]")

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"[Context: {context_str}]")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class EnrollmentError(BioPayError):
    """Enrollment could not produce a usable template.

    Recoverable: the caller should capture a new image and retry.
    """

    def __init__(
        self,
        message: str,
        feature_count: int = 0,
        min_features: int | None = None,
        **kwargs,
    ) -> None:
        context = kwargs.get("context", {})
        context["feature_count"] = feature_count
        if min_features is not None:
            context["min_features"] = min_features

        super().__init__(message, context, kwargs.get("error_code"))

    @property
    def feature_count(self) -> int:
        return self.context["feature_count"]


class NoFeaturesError(EnrollmentError):
    """The capture yielded no usable feature descriptors."""

    def __init__(self, min_features: int | None = None) -> None:
        super().__init__(
            "No facial features detected during enrollment",
            feature_count=0,
            min_features=min_features,
            error_code="ENROLL_001",
        )


class InsufficientFeaturesError(EnrollmentError):
    """The capture yielded fewer descriptors than enrollment requires."""

    def __init__(self, feature_count: int, min_features: int) -> None:
        super().__init__(
            f"Insufficient facial features detected: {feature_count} < {min_features}",
            feature_count=feature_count,
            min_features=min_features,
            error_code="ENROLL_002",
        )
