"""
Completion API - Pydantic Schemas

Defines the wire contract with the completions endpoint and the
request descriptor handed to the transport.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .models import GPTModel, model_name


# ============================================================================
# REQUEST
# ============================================================================

class CompletionRequest(BaseModel):
    """
    Body of POST /v1/completions.

    Optional fields left as None are not serialized, so the server
    applies its own defaults.
    """

    model: str
    prompt: Union[str, List[str]]
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    logprobs: Optional[int] = None
    echo: Optional[bool] = None
    stop: Optional[Union[str, List[str]]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    best_of: Optional[int] = None
    logit_bias: Optional[Dict[str, float]] = None
    user: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("model", mode="before")
    @classmethod
    def _concrete_model(cls, value: Any) -> Any:
        # model_name() rejects the default marker
        if isinstance(value, (GPTModel, str)):
            return model_name(value)
        return value

    def to_body(self) -> Dict[str, Any]:
        """JSON-ready body, without unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical call: where it goes, how, and with what body."""

    path: str
    method: Literal["GET", "POST"]
    body: CompletionRequest


# ============================================================================
# RESPONSE
# ============================================================================

class Choice(BaseModel):
    """A single generated completion."""
    text: str
    index: int
    logprobs: Optional[Dict[str, Any]] = None
    finish_reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Usage(BaseModel):
    """Token accounting for one request."""
    prompt_tokens: int
    completion_tokens: int = 0
    total_tokens: int

    model_config = ConfigDict(frozen=True)


class CompletionResponse(BaseModel):
    """Decoded result of a buffered completion call."""
    id: str
    object: str
    created: int
    model: str
    choices: List[Choice]
    usage: Usage

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        """Text of the first choice, or empty when there is none."""
        return self.choices[0].text if self.choices else ""


class StreamChunk(BaseModel):
    """One server-sent event of a streamed completion."""
    id: str
    object: str
    created: int
    model: str
    choices: List[Choice]

    model_config = ConfigDict(frozen=True)


# ============================================================================
# ERROR PAYLOAD
# ============================================================================

class APIErrorBody(BaseModel):
    """Server-supplied error details."""
    message: str
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[Union[str, int]] = None


class APIErrorEnvelope(BaseModel):
    """{"error": {...}} wrapper used by the API for every error response."""
    error: APIErrorBody
