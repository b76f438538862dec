"""
Error taxonomy for the analysis workflow.
"""


class AnalysisError(Exception):
    """Base class for all analysis workflow errors."""


class ClassificationFailure(AnalysisError):
    """The classifier failed or returned a malformed verdict."""

    kind = "classification"


class RetrievalFailure(AnalysisError):
    """Source retrieval failed after a positive verdict."""

    kind = "retrieval"


class NoRecordAvailable(AnalysisError):
    """A report was requested before any analysis completed."""

    def __init__(self, message: str = "No completed analysis is available to export"):
        super().__init__(message)
