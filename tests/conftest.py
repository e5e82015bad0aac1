"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gpt_client import GPT, GPTModel  # noqa: E402


TEST_API_KEY = "sk-test-123"


def _completion_body(text: str = "Hello there", model: str = "text-davinci-003") -> dict:
    return {
        "id": "cmpl-abc123",
        "object": "text_completion",
        "created": 1677858242,
        "model": model,
        "choices": [
            {"text": text, "index": 0, "logprobs": None, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12},
    }


def _sse_event(text: str) -> bytes:
    chunk = {
        "id": "cmpl-abc123",
        "object": "text_completion",
        "created": 1677858242,
        "model": "text-davinci-003",
        "choices": [{"text": text, "index": 0, "logprobs": None, "finish_reason": None}],
    }
    return f"data: {json.dumps(chunk)}\n\n".encode()


@pytest.fixture
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture
def completion_body() -> Callable[..., dict]:
    """Factory for a well-formed /v1/completions response body."""
    return _completion_body


@pytest.fixture
def sse_event() -> Callable[[str], bytes]:
    """Factory for one encoded server-sent completion event."""
    return _sse_event


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Every request that reached the mock transport, in order."""
    return []


@pytest.fixture
def make_client(sent_requests) -> Callable[..., GPT]:
    """
    Build a GPT client whose transport is an httpx.MockTransport.

    Usage:
        client = make_client(lambda request: httpx.Response(200, json=...))
    """

    def _make(handler, default_model=GPTModel.DAVINCI) -> GPT:
        def recording_handler(request: httpx.Request):
            sent_requests.append(request)
            return handler(request)

        return GPT(
            api_key=TEST_API_KEY,
            default_model=default_model,
            http_transport=httpx.MockTransport(recording_handler),
        )

    return _make
