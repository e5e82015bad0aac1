"""
Typed async client for the OpenAI completions API.

Three ways to use one request:
- GPT.complete(): send and decode a CompletionResponse
- GPT.streamed_answer.complete(): iterate text chunks as they arrive
- GPT.curl(): render the identical request as a curl command

Every failure is raised as a GPTClientError subclass.

Example usage:
    from gpt_client import GPT, GPTModel

    async with GPT(api_key="sk-...", default_model=GPTModel.CURIE) as gpt:
        response = await gpt.complete("Write a haiku about tea")
"""

from .client import GPT
from .config import API_BASE, V1_COMPLETIONS, ClientConfig, TransportSettings
from .curl import render_curl
from .errors import (
    AuthenticationFailure,
    ErrorKind,
    GPTClientError,
    InvalidResponseShape,
    ServerReportedFailure,
    TransportFailure,
    UnknownFailure,
    normalize_error,
)
from .models import LIBRARY_DEFAULT_MODEL, GPTModel, ModelSelector
from .streaming import StreamedAnswer
from .types import (
    Choice,
    CompletionRequest,
    CompletionResponse,
    RequestDescriptor,
    StreamChunk,
    Usage,
)

__all__ = [
    "GPT",
    "StreamedAnswer",
    "GPTModel",
    "ModelSelector",
    "LIBRARY_DEFAULT_MODEL",
    "ClientConfig",
    "TransportSettings",
    "API_BASE",
    "V1_COMPLETIONS",
    "CompletionRequest",
    "CompletionResponse",
    "Choice",
    "Usage",
    "StreamChunk",
    "RequestDescriptor",
    "render_curl",
    "ErrorKind",
    "GPTClientError",
    "AuthenticationFailure",
    "TransportFailure",
    "InvalidResponseShape",
    "ServerReportedFailure",
    "UnknownFailure",
    "normalize_error",
]
