"""
Resilient Dispatcher - primary/fallback model selection with error classification.

Each invocation walks the configured model tiers strictly in order:

  Attempting(0) --success--> Succeeded
  Attempting(i) --transient failure, tier i+1 exists--> Attempting(i+1)
  Attempting(i) --terminal failure, or last tier--> Failed

Classification is case-sensitive substring matching on the raw error message.
No timeout of its own: whatever the model client enforces applies.

Usage:
    dispatcher = ResilientDispatcher(selector)
    result = await dispatcher.dispatch(lambda model: invoker.invoke(flow, request, model))
    output = raise_on_failure(result)      # or as_error_record(result)
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Tuple, Union

from app.schemas.common import ErrorRecord
from app.services.errors import (
    MalformedOutputError,
    ModelInvocationError,
    TerminalModelError,
    TransientModelError,
)
from app.utils.logger import get_logger
from app.utils.metrics import inc

logger = get_logger()


DEFAULT_TRANSIENT_MARKERS: Tuple[str, ...] = ("503", "overloaded", "429")

RATE_LIMIT_MARKER = "429"
RATE_LIMITED_MESSAGE = "You have exceeded the API rate limit. Please try again in a few moments."
BUSY_MESSAGE = "Our AI is currently busy. Please try again in a few moments."


@dataclass(frozen=True)
class ModelSelector:
    """Ordered model identifiers, most capable first. Never mutated after startup."""
    models: Tuple[str, ...]

    def __post_init__(self):
        if not self.models:
            raise ValueError("ModelSelector needs at least one model identifier")

    @property
    def primary(self) -> str:
        return self.models[0]

    @property
    def fallback(self) -> str:
        return self.models[-1]


class Classification(str, Enum):
    TRANSIENT = "transient"
    TERMINAL = "terminal"


def classify_failure(message: str, markers: Tuple[str, ...] = DEFAULT_TRANSIENT_MARKERS) -> Classification:
    """Transient if the message contains any marker, terminal otherwise."""
    message = message or ""
    if any(marker in message for marker in markers):
        return Classification.TRANSIENT
    return Classification.TERMINAL


def classify_error(exc: ModelInvocationError, markers: Tuple[str, ...] = DEFAULT_TRANSIENT_MARKERS) -> Classification:
    """Unusable replies are terminal outright; anything else is classified by its message."""
    if isinstance(exc, MalformedOutputError):
        return Classification.TERMINAL
    return classify_failure(exc.message, markers)


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass
class DispatchSuccess:
    output: Dict[str, Any]
    model: str
    attempts: Tuple[str, ...] = field(default_factory=tuple)
    fallbacks: Tuple[TransientModelError, ...] = field(default_factory=tuple)

    ok = True


@dataclass
class DispatchFailure:
    error: ModelInvocationError
    classification: Classification
    attempts: Tuple[str, ...] = field(default_factory=tuple)
    fallbacks: Tuple[TransientModelError, ...] = field(default_factory=tuple)

    ok = False


DispatchResult = Union[DispatchSuccess, DispatchFailure]


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class ResilientDispatcher:
    def __init__(
        self,
        selector: ModelSelector,
        transient_markers: Tuple[str, ...] = DEFAULT_TRANSIENT_MARKERS,
        flow: str = "",
    ):
        self.selector = selector
        self.transient_markers = transient_markers
        self.flow = flow

    async def dispatch(self, invoke: Callable[[str], Awaitable[Dict[str, Any]]]) -> DispatchResult:
        """Run `invoke(model)` against each tier in order until one succeeds or a failure is terminal."""
        attempted = []
        fallbacks = []
        models = self.selector.models

        for index, model in enumerate(models):
            attempted.append(model)
            try:
                output = await invoke(model)
            except ModelInvocationError as exc:
                classification = classify_error(exc, self.transient_markers)
                has_next = index + 1 < len(models)

                if classification is Classification.TRANSIENT and has_next:
                    logger.warning(
                        "dispatcher.fallback",
                        extra={
                            "flow": self.flow,
                            "model": model,
                            "attempt": index + 1,
                            "classification": classification.value,
                            "error": exc.message[:200],
                        },
                    )
                    inc(f"dispatch.{self.flow or 'unnamed'}.fallback")
                    fallbacks.append(TransientModelError(exc.message, model=exc.model or model))
                    continue

                logger.error(
                    "dispatcher.failed",
                    extra={
                        "flow": self.flow,
                        "model": model,
                        "attempt": index + 1,
                        "classification": classification.value,
                        "error": exc.message[:200],
                    },
                )
                return DispatchFailure(
                    error=exc,
                    classification=classification,
                    attempts=tuple(attempted),
                    fallbacks=tuple(fallbacks),
                )

            return DispatchSuccess(
                output=output,
                model=model,
                attempts=tuple(attempted),
                fallbacks=tuple(fallbacks),
            )

        # Unreachable: the loop returns on the last tier either way.
        raise RuntimeError("dispatcher exhausted model tiers without a result")


# ---------------------------------------------------------------------------
# Convention adapters
# ---------------------------------------------------------------------------

def raise_on_failure(result: DispatchResult) -> Dict[str, Any]:
    """Throwing convention: the output, or TerminalModelError chained to the cause."""
    if result.ok:
        return result.output
    error = result.error
    raise TerminalModelError(
        error.message,
        model=error.model,
        transient_cause=result.classification is Classification.TRANSIENT,
    ) from error


def error_record_message(result: DispatchFailure) -> str:
    message = result.error.message
    if result.classification is Classification.TRANSIENT:
        return RATE_LIMITED_MESSAGE if RATE_LIMIT_MARKER in message else BUSY_MESSAGE
    return f"An unexpected error occurred: {message}"


def as_error_record(result: DispatchResult) -> Dict[str, Any]:
    """Result convention: the output, or {"error": True, "message": ...}."""
    if result.ok:
        return result.output
    return ErrorRecord(message=error_record_message(result)).model_dump()
