"""Domain-level exceptions.

Every failure the pipeline can report is a subclass of DomainException so
the presentation layer can catch them uniformly and render ``str(exc)`` as
a transient notification.  The subclasses stay typed so tests and callers
can still tell them apart.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class FeedError(DomainException):
    """The catalog feed reported a subscription-level error.

    Non-fatal: the subscription keeps delivering after one of these.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ImageProcessingFailed(DomainException):
    """The selected image could not be materialized into a local file."""

    def __init__(self, message: str = "Failed to process image") -> None:
        super().__init__(message)


class UploadFailed(DomainException):
    """The image host rejected the upload or could not be reached."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Image upload failed: {detail}")
        self.detail = detail


class UploadResponseMalformed(DomainException):
    """The image host answered successfully but without a usable link."""

    def __init__(self, message: str = "Image host response missing image URL") -> None:
        super().__init__(message)


class PersistenceFailed(DomainException):
    """The authoritative document store rejected or failed a write."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Store error: {detail}")
        self.detail = detail


class PaymentFailed(DomainException):
    """The payment gateway did not accept the payment request."""
