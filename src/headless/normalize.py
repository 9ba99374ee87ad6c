"""Map backend outcomes onto the ``ExecutionResult`` contract."""

from .protocol import ExecutionResult


def error_message(error: BaseException) -> str:
    """Human-readable message for a failure, never empty."""
    return str(error) or type(error).__name__


def to_result(outcome: str | Exception, duration_ms: int) -> ExecutionResult:
    """Build the result for an adapter outcome.

    A string is the adapter's answer and is kept verbatim.  An exception
    becomes a failed result carrying its message.
    """
    duration_ms = max(0, int(duration_ms))
    if isinstance(outcome, BaseException):
        return ExecutionResult(
            success=False,
            response="",
            error=error_message(outcome),
            duration_ms=duration_ms,
        )
    return ExecutionResult(
        success=True,
        response=outcome,
        duration_ms=duration_ms,
    )
