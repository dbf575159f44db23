"""
Prompt Invoker - one rendered prompt, one model, one shape-checked payload.

Retry policy lives in the dispatcher; a failure here is always raised.
"""
from typing import Any, Dict

from pydantic import BaseModel, ValidationError

from app.middleware.correlation import get_correlation_id
from app.services.errors import MalformedOutputError, ModelInvocationError
from app.services.model_client import ModelClient
from app.utils.logger import get_logger
from app.utils.metrics import track_duration

logger = get_logger()


def check_output_shape(payload: Any, output_model: type[BaseModel]) -> None:
    """Raise ModelInvocationError unless payload structurally matches output_model."""
    if not isinstance(payload, dict):
        raise MalformedOutputError(
            f"AI response has the wrong shape: expected an object, got {type(payload).__name__}"
        )
    try:
        output_model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{' -> '.join(str(loc) for loc in err['loc']) or '(root)'}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedOutputError(f"AI response failed output validation: {problems}") from e


class PromptInvoker:
    def __init__(self, client: ModelClient):
        self.client = client

    async def invoke(self, flow, request: BaseModel, model: str) -> Dict[str, Any]:
        """
        Render `flow.build_prompt(request)`, send it to `model`, validate the reply
        against `flow.output_model`.

        Returns the parsed payload exactly as the model produced it.
        """
        prompt = flow.build_prompt(request)

        logger.info(
            "invoker.attempt",
            extra={"flow": flow.name, "model": model, "correlation_id": get_correlation_id()},
        )

        async with track_duration(flow.name, model):
            try:
                payload = await self.client.generate(prompt, model)
            except ModelInvocationError as e:
                if e.model is None:
                    e.model = model
                raise
            except Exception as e:
                raise ModelInvocationError(str(e), model=model) from e
            try:
                check_output_shape(payload, flow.output_model)
            except ModelInvocationError as e:
                e.model = model
                raise

        return payload
