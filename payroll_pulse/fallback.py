"""Optional external model collaborator with a deterministic fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Literal, Optional, Protocol, TypeVar

from .models import PayrollRules

logger = logging.getLogger("payroll_pulse.fallback")

T = TypeVar("T")

ComputationType = Literal["attendance_parsing", "payroll_calculation", "dashboard_metrics"]


@dataclass(slots=True)
class ComputationRequest:
    type: ComputationType
    data: Dict[str, Any]
    rules: Optional[PayrollRules] = None
    context: str = ""


@dataclass(slots=True)
class ComputationResult:
    success: bool
    result: Any = None
    error: Optional[str] = None
    reasoning: Optional[str] = None
    confidence: Optional[float] = None


class ExternalModel(Protocol):
    """Anything able to answer a computation request, e.g. a hosted LLM."""

    def compute(self, request: ComputationRequest) -> ComputationResult: ...


@dataclass(slots=True)
class FallbackOutcome(Generic[T]):
    value: T
    used_fallback: bool
    reasoning: Optional[str] = None
    confidence: Optional[float] = None
    error: Optional[str] = None


def run_with_fallback(
    model: Optional[ExternalModel],
    request: ComputationRequest,
    fallback: Callable[[], T],
) -> FallbackOutcome[T]:
    """Ask ``model`` first and fall back to the deterministic computation.

    Model failures, including raised exceptions, are reported on the
    outcome and never propagate.
    """

    if model is None:
        return FallbackOutcome(value=fallback(), used_fallback=True)

    try:
        response = model.compute(request)
    except Exception as exc:  # noqa: BLE001
        logger.warning("External %s raised, using fallback: %s", request.type, exc)
        return FallbackOutcome(
            value=fallback(),
            used_fallback=True,
            error=f"External computation error: {exc}. Used fallback method.",
        )

    if not response.success:
        logger.warning("External %s failed, using fallback: %s", request.type, response.error)
        return FallbackOutcome(
            value=fallback(),
            used_fallback=True,
            error=f"External computation failed: {response.error}. Used fallback method.",
        )

    return FallbackOutcome(
        value=response.result,
        used_fallback=False,
        reasoning=response.reasoning,
        confidence=response.confidence,
    )


__all__ = [
    "ComputationRequest",
    "ComputationResult",
    "ExternalModel",
    "FallbackOutcome",
    "run_with_fallback",
]
