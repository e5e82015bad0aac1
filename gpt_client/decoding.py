"""
Response decoding.

Buffered bodies are validated strictly against the declared response
model. Streamed bodies are server-sent events:

    data: {"id": ..., "choices": [{"text": "The", ...}]}
    data: {"id": ..., "choices": [{"text": " cat", ...}]}
    data: [DONE]

Decoding never classifies failures; it raises the raw exception
(pydantic.ValidationError, StreamEventError) for the error normalizer.
"""

import json
from typing import AsyncIterator, Type, TypeVar

import httpx
from pydantic import BaseModel

from .types import APIErrorEnvelope, StreamChunk

ResponseT = TypeVar("ResponseT", bound=BaseModel)

_DONE = "[DONE]"


class StreamEventError(Exception):
    """The server reported an error inside an open event stream."""

    def __init__(self, payload: APIErrorEnvelope):
        self.payload = payload
        super().__init__(payload.error.message)


def decode_response(response: httpx.Response, response_type: Type[ResponseT]) -> ResponseT:
    """
    Validate a buffered response body.

    Raises:
        pydantic.ValidationError: Body is not JSON or does not match the shape.
    """
    return response_type.model_validate_json(response.content)


def _parse_event(data: str) -> StreamChunk:
    try:
        obj = json.loads(data)
    except json.JSONDecodeError:
        # Let pydantic report the invalid JSON as a shape failure
        return StreamChunk.model_validate_json(data)
    if isinstance(obj, dict) and "error" in obj:
        raise StreamEventError(APIErrorEnvelope.model_validate(obj))
    return StreamChunk.model_validate(obj)


async def iter_completion_chunks(response: httpx.Response) -> AsyncIterator[str]:
    """
    Yield the generated text of each event, in arrival order.

    Stops at `data: [DONE]` or when the server closes the stream.
    Comment lines, keep-alives and non-data fields are skipped.
    """
    async for line in response.aiter_lines():
        if not line.startswith("data:"):
            continue
        data = line[5:].strip()
        if not data:
            continue
        if data == _DONE:
            return
        chunk = _parse_event(data)
        if chunk.choices:
            yield chunk.choices[0].text
