"""Stage outcomes and deadline-bounded execution.

Every external call in the pipeline (completion or search) runs through
run_with_deadline(), which turns timeouts and transport errors into a
StageResult failure instead of an exception. The orchestrator then decides
which degraded value replaces a failed stage.

ConfigurationError is never converted: it propagates to the caller.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Generic, Optional, TypeVar

import structlog

from factcheck_system.errors import ConfigurationError, MalformedCompletionError

T = TypeVar("T")

_logger = structlog.get_logger(component="StageRunner")


class StageFailure(str, Enum):
    """Why a stage produced no usable value."""

    TIMEOUT = "timeout"
    MALFORMED_OUTPUT = "malformed_output"
    ERROR = "error"


@dataclass
class StageResult(Generic[T]):
    """Value-or-failure outcome of one pipeline stage.

    Attributes:
        stage: Stage name, used in logs
        value: Stage output when ok, otherwise None
        failure: Failure kind when the stage did not complete
        detail: Error message for failed stages
    """

    stage: str
    value: Optional[T] = None
    failure: Optional[StageFailure] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    def value_or(self, degraded: T) -> T:
        """Return the stage value, or the degraded substitute when failed."""
        return self.value if self.ok else degraded

    @classmethod
    def success(cls, stage: str, value: T) -> "StageResult[T]":
        return cls(stage=stage, value=value)

    @classmethod
    def failed(cls, stage: str, failure: StageFailure, detail: str = "") -> "StageResult[T]":
        return cls(stage=stage, failure=failure, detail=detail)


async def run_with_deadline(
    stage: str,
    awaitable: Awaitable[T],
    timeout: float,
) -> StageResult[T]:
    """Await an external call with a deadline.

    On expiry the underlying call is cancelled by asyncio.wait_for and never
    awaited further.

    Args:
        stage: Stage name for logging.
        awaitable: The call to run.
        timeout: Deadline in seconds.

    Returns:
        StageResult holding either the value or the failure kind.

    Raises:
        ConfigurationError: Propagated unchanged.
    """
    try:
        value = await asyncio.wait_for(awaitable, timeout=timeout)
    except ConfigurationError:
        raise
    except asyncio.TimeoutError:
        _logger.warning("stage_timeout", stage=stage, timeout=timeout)
        return StageResult.failed(stage, StageFailure.TIMEOUT, f"timeout after {timeout}s")
    except MalformedCompletionError as e:
        _logger.warning("stage_malformed_output", stage=stage, error=str(e))
        return StageResult.failed(stage, StageFailure.MALFORMED_OUTPUT, str(e))
    except Exception as e:
        _logger.error("stage_failed", stage=stage, error=str(e), error_type=type(e).__name__)
        return StageResult.failed(stage, StageFailure.ERROR, str(e))
    return StageResult.success(stage, value)
