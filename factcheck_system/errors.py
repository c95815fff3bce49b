"""Exception hierarchy for the fact-check system.

Only configuration problems and base-classification failures ever escape a
request. Everything raised inside corroboration stages is converted into a
StageResult failure by the orchestrator.
"""


class FactCheckError(Exception):
    """Base class for all fact-check errors."""


class ConfigurationError(FactCheckError):
    """Missing credentials or an unknown provider name.

    Fatal for the request and never retried.
    """


class MalformedCompletionError(FactCheckError):
    """Language-model output could not be parsed as a JSON object."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class BaseClassificationError(FactCheckError):
    """The base content classification failed; the request cannot succeed."""
