"""
Request construction shared by the buffered facade, the streaming facade
and curl rendering. Model resolution happens here and nowhere else.
"""

from typing import Union

from .config import V1_COMPLETIONS
from .models import GPTModel, ModelSelector, is_default_marker, resolve_model
from .types import CompletionRequest, RequestDescriptor


def build_completion_request(
    prompt: Union[str, CompletionRequest],
    model: ModelSelector,
    default_model: ModelSelector,
) -> CompletionRequest:
    """
    Resolve the caller's arguments into a concrete request payload.

    A prompt string gets the resolved model; a CompletionRequest is used
    as given and must not be combined with a model argument.

    Raises:
        TypeError: If a model is passed alongside a CompletionRequest, or
                   prompt or model has an unsupported type.
    """
    if not isinstance(model, (GPTModel, str)):
        raise TypeError(f"model must be a GPTModel or str, not {type(model).__name__}")
    if isinstance(prompt, CompletionRequest):
        if not is_default_marker(model):
            raise TypeError("pass the model inside the CompletionRequest, not alongside it")
        return prompt
    if not isinstance(prompt, str):
        raise TypeError(
            f"prompt must be a str or CompletionRequest, not {type(prompt).__name__}"
        )
    return CompletionRequest(model=resolve_model(model, default_model), prompt=prompt)


def completion_descriptor(request: CompletionRequest) -> RequestDescriptor:
    return RequestDescriptor(path=V1_COMPLETIONS, method="POST", body=request)
