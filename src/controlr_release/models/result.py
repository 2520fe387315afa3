"""Stage results for the release pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ReleaseError


class StageOutcome(str, Enum):
    """How a pipeline stage ended."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class StageResult:
    """Tagged result of a pipeline stage.

    A failed result carries the error that stopped the run. A cancelled
    result is a clean stop chosen by the operator (exit code 0) and may
    carry follow-up commands.

    Example:
        >>> result = StageResult.success("package", report)
        >>> if not result.ok:
        ...     return result
    """

    stage: str
    outcome: StageOutcome
    value: Any = None
    error: ReleaseError | None = None
    message: str = ""
    hints: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, stage: str, value: Any = None, message: str = "") -> "StageResult":
        return cls(stage=stage, outcome=StageOutcome.SUCCEEDED, value=value, message=message)

    @classmethod
    def failure(cls, stage: str, error: ReleaseError) -> "StageResult":
        return cls(stage=stage, outcome=StageOutcome.FAILED, error=error, message=error.message)

    @classmethod
    def cancelled(
        cls, stage: str, message: str, hints: list[str] | None = None, value: Any = None
    ) -> "StageResult":
        return cls(
            stage=stage,
            outcome=StageOutcome.CANCELLED,
            value=value,
            message=message,
            hints=hints or [],
        )

    @property
    def ok(self) -> bool:
        return self.outcome is StageOutcome.SUCCEEDED

    @property
    def exit_code(self) -> int:
        if self.outcome is StageOutcome.FAILED and self.error is not None:
            return self.error.exit_code
        return 0


@dataclass
class PipelineResult:
    """Ordered stage results of one pipeline run.

    The pipeline stops at the first stage that did not succeed, so only the
    last stage can be failed or cancelled.
    """

    stages: list[StageResult] = field(default_factory=list)

    def add(self, stage: StageResult) -> bool:
        """Record a stage result and return whether the pipeline may continue."""
        self.stages.append(stage)
        return stage.ok

    @property
    def last(self) -> StageResult | None:
        return self.stages[-1] if self.stages else None

    @property
    def outcome(self) -> StageOutcome:
        if self.last is None:
            return StageOutcome.SUCCEEDED
        return self.last.outcome

    @property
    def ok(self) -> bool:
        return self.outcome is StageOutcome.SUCCEEDED

    @property
    def error(self) -> ReleaseError | None:
        return self.last.error if self.last is not None else None

    @property
    def exit_code(self) -> int:
        return self.last.exit_code if self.last is not None else 0

    def value(self, stage: str) -> Any:
        """Return the value produced by a named stage, or None."""
        for result in self.stages:
            if result.stage == stage:
                return result.value
        return None
