"""
Error taxonomy for the assist pipeline.

Transport failures and contract violations are both AssistErrors so task
modules can fall back on either with a single except clause.  Quote
generation is the one task that lets them escape, wrapped as
QuoteGenerationError.
"""


class AssistError(RuntimeError):
    """Base class for every error raised by the assist pipeline."""


class ConfigurationError(AssistError):
    """Required configuration (the API key) is missing."""


class LlmRequestError(AssistError):
    """The endpoint call failed or returned no usable content."""


class ResponseContractError(AssistError):
    """The response body could not be decoded into the declared contract."""


class InsufficientTranscriptError(AssistError):
    """The transcript is too short for a task that has no neutral result."""


class QuoteGenerationError(AssistError):
    """Quote generation failed; there is no safe default quote."""
