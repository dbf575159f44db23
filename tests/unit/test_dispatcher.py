"""
tests/unit/test_dispatcher.py

Unit tests for the resilient dispatcher and its convention adapters.

Verifies:
✔ Success on the primary tier never touches the fallback tier
✔ "503" / "overloaded" / "429" failures fall back to the next tier, exactly once
✔ Any other failure is terminal immediately
✔ Two failures are terminal regardless of the second failure's wording
✔ Successful output is returned untouched
✔ raise_on_failure / as_error_record map failures to the two conventions
"""

import pytest

from app.config import Settings, build_model_selector
from app.services.dispatcher import (
    BUSY_MESSAGE,
    RATE_LIMITED_MESSAGE,
    Classification,
    DispatchFailure,
    ModelSelector,
    ResilientDispatcher,
    as_error_record,
    classify_error,
    classify_failure,
    raise_on_failure,
)
from app.services.errors import (
    MalformedOutputError,
    ModelInvocationError,
    TerminalModelError,
    TransientModelError,
)


def scripted_invoke(replies):
    """Build an invoke(model) callable that answers from a per-model script and records calls."""
    calls = []

    async def invoke(model):
        calls.append(model)
        reply = replies[model]
        if isinstance(reply, Exception):
            raise reply
        return reply

    return invoke, calls


class TestClassifyFailure:

    @pytest.mark.parametrize("message", [
        "Error: 503 Service Unavailable",
        "The model is overloaded. Please try again later.",
        "Error code: 429 - Resource has been exhausted",
    ])
    def test_transient_markers(self, message):
        assert classify_failure(message) is Classification.TRANSIENT

    @pytest.mark.parametrize("message", [
        "Error: 500 Internal Server Error",
        "AI response failed output validation: questions -> 0 -> correctAnswer: Field required",
        "",
    ])
    def test_terminal_messages(self, message):
        assert classify_failure(message) is Classification.TERMINAL

    def test_matching_is_case_sensitive(self):
        assert classify_failure("Model OVERLOADED") is Classification.TERMINAL

    def test_custom_markers_exclude_429(self):
        markers = ("503", "overloaded")
        assert classify_failure("Error code: 429", markers) is Classification.TERMINAL
        assert classify_failure("Error code: 503", markers) is Classification.TRANSIENT


class TestClassifyError:

    def test_malformed_output_is_terminal_whatever_its_text(self):
        exc = MalformedOutputError("AI response was not valid JSON: line 1 column 504 (char 503)")
        assert classify_error(exc) is Classification.TERMINAL

    def test_upstream_error_is_classified_by_message(self):
        assert classify_error(ModelInvocationError("Error code: 429")) is Classification.TRANSIENT
        assert classify_error(ModelInvocationError("Error code: 400")) is Classification.TERMINAL

    @pytest.mark.asyncio
    async def test_dispatch_stops_on_malformed_output(self, selector):
        invoke, calls = scripted_invoke({
            selector.primary: MalformedOutputError("AI response failed output validation: questions -> 429 -> correctAnswer"),
            selector.fallback: {"never": True},
        })

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert not result.ok
        assert result.classification is Classification.TERMINAL
        assert calls == [selector.primary]


class TestModelSelector:

    def test_primary_and_fallback(self, selector):
        assert selector.primary == "gemini-2.5-pro"
        assert selector.fallback == "gemini-2.5-flash"

    def test_empty_selector_rejected(self):
        with pytest.raises(ValueError):
            ModelSelector(models=())

    def test_selector_is_immutable(self, selector):
        with pytest.raises(Exception):
            selector.models = ("other",)

    def test_built_from_settings(self):
        selector = build_model_selector(Settings(primary_model="tier-a", fallback_model="tier-b"))
        assert selector.models == ("tier-a", "tier-b")


class TestDispatch:

    @pytest.mark.asyncio
    async def test_primary_success_skips_fallback(self, selector):
        output = {"response": "hello"}
        invoke, calls = scripted_invoke({selector.primary: output, selector.fallback: {"response": "no"}})

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert result.ok
        assert result.output is output
        assert result.model == selector.primary
        assert calls == [selector.primary]
        assert result.fallbacks == ()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["Error: 503", "model is overloaded", "Error code: 429"])
    async def test_transient_failure_falls_back_once(self, selector, message):
        output = {"response": "from flash"}
        invoke, calls = scripted_invoke({
            selector.primary: ModelInvocationError(message),
            selector.fallback: output,
        })

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert result.ok
        assert result.output == {"response": "from flash"}
        assert calls == [selector.primary, selector.fallback]
        assert len(result.fallbacks) == 1
        assert isinstance(result.fallbacks[0], TransientModelError)
        assert result.fallbacks[0].model == selector.primary

    @pytest.mark.asyncio
    async def test_terminal_failure_stops_immediately(self, selector):
        invoke, calls = scripted_invoke({
            selector.primary: ModelInvocationError("Error: 500 Internal Server Error"),
            selector.fallback: {"response": "never"},
        })

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert isinstance(result, DispatchFailure)
        assert result.classification is Classification.TERMINAL
        assert calls == [selector.primary]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("second", ["Error: 500 boom", "Error: 503 still overloaded"])
    async def test_both_tiers_failing_is_terminal(self, selector, second):
        invoke, calls = scripted_invoke({
            selector.primary: ModelInvocationError("Error: 503"),
            selector.fallback: ModelInvocationError(second),
        })

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert not result.ok
        assert result.error.message == second
        assert calls == [selector.primary, selector.fallback]
        with pytest.raises(TerminalModelError):
            raise_on_failure(result)

    @pytest.mark.asyncio
    async def test_three_tiers_walk_in_order(self):
        selector = ModelSelector(models=("a", "b", "c"))
        invoke, calls = scripted_invoke({
            "a": ModelInvocationError("429"),
            "b": ModelInvocationError("overloaded"),
            "c": {"ok": True},
        })

        result = await ResilientDispatcher(selector).dispatch(invoke)

        assert result.ok
        assert calls == ["a", "b", "c"]
        assert result.attempts == ("a", "b", "c")

    @pytest.mark.asyncio
    async def test_flow_specific_markers(self, selector):
        invoke, calls = scripted_invoke({
            selector.primary: ModelInvocationError("Error code: 429"),
            selector.fallback: {"never": True},
        })

        dispatcher = ResilientDispatcher(selector, transient_markers=("503", "overloaded"))
        result = await dispatcher.dispatch(invoke)

        assert not result.ok
        assert calls == [selector.primary]


class TestConventionAdapters:

    def _failure(self, message, classification):
        return DispatchFailure(error=ModelInvocationError(message, model="m"), classification=classification)

    def test_raise_on_failure_chains_cause(self):
        failure = self._failure("Error: 500", Classification.TERMINAL)
        with pytest.raises(TerminalModelError) as info:
            raise_on_failure(failure)
        assert info.value.__cause__ is failure.error
        assert info.value.transient_cause is False
        assert info.value.model == "m"

    def test_raise_on_failure_marks_transient_cause(self):
        with pytest.raises(TerminalModelError) as info:
            raise_on_failure(self._failure("Error: 503", Classification.TRANSIENT))
        assert info.value.transient_cause is True

    def test_error_record_for_rate_limit(self):
        record = as_error_record(self._failure("Error code: 429", Classification.TRANSIENT))
        assert record == {"error": True, "message": RATE_LIMITED_MESSAGE}

    def test_error_record_for_busy_model(self):
        record = as_error_record(self._failure("model is overloaded", Classification.TRANSIENT))
        assert record == {"error": True, "message": BUSY_MESSAGE}

    def test_error_record_for_unexpected_failure(self):
        record = as_error_record(self._failure("Error: 500 Internal Server Error", Classification.TERMINAL))
        assert record["error"] is True
        assert record["message"] == "An unexpected error occurred: Error: 500 Internal Server Error"

    def test_terminal_error_mentioning_429_keeps_unexpected_wording(self):
        record = as_error_record(self._failure("questions -> 429 -> correctAnswer: Field required", Classification.TERMINAL))
        assert record["message"].startswith("An unexpected error occurred:")
