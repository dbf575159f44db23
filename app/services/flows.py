"""
Flow definitions - per-flow output shape, prompt builder and retry/response policy,
and the one runner every service function goes through.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel

from app.services.dispatcher import (
    DEFAULT_TRANSIENT_MARKERS,
    ModelSelector,
    ResilientDispatcher,
    as_error_record,
    raise_on_failure,
)
from app.services.invoker import PromptInvoker
from app.services.model_client import ModelClient


class Convention(str, Enum):
    THROW = "throw"    # terminal failure raises TerminalModelError
    RESULT = "result"  # terminal failure returns {"error": True, "message": ...}


class Tier(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FlowPolicy:
    convention: Convention
    single_attempt: bool = False
    single_attempt_tier: Tier = Tier.FALLBACK
    transient_markers: Tuple[str, ...] = DEFAULT_TRANSIENT_MARKERS


@dataclass(frozen=True)
class FlowDefinition:
    name: str
    output_model: type[BaseModel]
    build_prompt: Callable[[Any], str]
    policy: FlowPolicy


async def run_flow(
    flow: FlowDefinition,
    request: BaseModel,
    client: ModelClient,
    selector: ModelSelector,
) -> Dict[str, Any]:
    """
    Invoke `flow` for one validated request.

    Single-attempt flows go straight to the invoker on their configured tier and
    let any ModelInvocationError propagate. All others run through the
    dispatcher and come back in the flow's convention.
    """
    invoker = PromptInvoker(client)

    if flow.policy.single_attempt:
        model = selector.primary if flow.policy.single_attempt_tier is Tier.PRIMARY else selector.fallback
        return await invoker.invoke(flow, request, model)

    dispatcher = ResilientDispatcher(
        selector,
        transient_markers=flow.policy.transient_markers,
        flow=flow.name,
    )
    result = await dispatcher.dispatch(lambda model: invoker.invoke(flow, request, model))

    if flow.policy.convention is Convention.THROW:
        return raise_on_failure(result)
    return as_error_record(result)


def fmt_number(value: float) -> str:
    """95.0 -> '95', 87.5 -> '87.5'"""
    return f"{value:g}"


def optional_line(label: str, value: Optional[Any], suffix: str = "") -> str:
    """Prompt helper: '- label: value' or nothing when value is missing."""
    if value is None or value == "":
        return ""
    if isinstance(value, float):
        value = fmt_number(value)
    return f"- {label}: {value}{suffix}"
