"""
exception types raised by the pipeline.

configuration problems stop a build before anything is written;
validation failures stop at the first broken invariant.
"""


class ConfigurationError(RuntimeError):
    """bad or missing input: source lists, policy fields, frequency columns."""


class PipelineValidationError(ValueError):
    """an artifact broke one of its invariants."""
