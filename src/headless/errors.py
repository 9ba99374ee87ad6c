"""Error taxonomy.

``ConfigurationError`` is fatal and raised before any call is made.
``ExecutionError`` and its subclasses are per-call failures; the
orchestrator turns them into failed ``ExecutionResult`` objects.
"""


class ConfigurationError(Exception):
    """Invalid or incomplete startup configuration."""


class ExecutionError(Exception):
    """Base class for failures of a single invocation."""


class BackendError(ExecutionError):
    """The backend could not produce an answer.

    Raised for a missing credential, a failure reported by the backend,
    a timeout, or a stream that ended without a result.
    """


class TransportError(ExecutionError):
    """Lower-level failure while opening or consuming a backend session."""
