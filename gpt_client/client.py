"""
GPT completion client.

The buffered call facade. One call = one descriptor = one HTTP exchange,
with every failure normalized into the GPTClientError taxonomy.

Usage:
    async with GPT(api_key="sk-...") as gpt:
        response = await gpt.complete("Say hello")
        print(response.text)

        async for token in gpt.streamed_answer.complete("Say hello"):
            print(token, end="")

        print(gpt.curl("Say hello"))
"""

import logging
from typing import Optional, Union

import httpx

from .auth import BearerAuthenticator
from .config import ClientConfig, TransportSettings
from .curl import render_curl
from .decoding import decode_response
from .errors import normalize_error
from .models import LIBRARY_DEFAULT_MODEL, GPTModel, ModelSelector
from .request_builder import build_completion_request, completion_descriptor
from .streaming import StreamedAnswer
from .transport import TransportAdapter
from .types import CompletionRequest, CompletionResponse, RequestDescriptor

logger = logging.getLogger(__name__)


class GPT:
    """
    A simple wrapper around the completions API.

    Guarantees:
    - No network I/O at construction
    - Exactly one request per call, never retried
    - Only GPTClientError subclasses escape a call
    - Safe for concurrent calls (configuration is immutable)
    """

    def __init__(
        self,
        api_key: str,
        default_model: ModelSelector = LIBRARY_DEFAULT_MODEL,
        settings: Optional[TransportSettings] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key:        API key from the account page
            default_model:  Model used when a call does not name one
            settings:       Optional transport tuning (timeouts, base URL)
            http_transport: Optional httpx transport (proxies, custom TLS, tests)

        Raises:
            ValueError: If api_key is empty.
        """
        self.config = ClientConfig(
            api_key=api_key,
            default_model=default_model,
            transport=settings or TransportSettings(),
        )
        self._transport = TransportAdapter(
            BearerAuthenticator(self.config.api_key),
            self.config.transport,
            transport=http_transport,
        )

        # Same methods as GPT, but yields tokens as they are generated
        self.streamed_answer = StreamedAnswer(self._transport, self.config)

    @property
    def default_model(self) -> ModelSelector:
        return self.config.default_model

    async def __aenter__(self) -> "GPT":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP connections."""
        await self._transport.aclose()

    # ──────────────────────────────────────────────────────────
    # Completion
    # ──────────────────────────────────────────────────────────

    async def complete(
        self,
        prompt: Union[str, CompletionRequest],
        model: ModelSelector = GPTModel.DEFAULT,
    ) -> CompletionResponse:
        """
        Generate a completion.

        Args:
            prompt: The prompt to complete, or a full CompletionRequest
                    for control over every generation parameter
            model:  Model for a plain prompt; GPTModel.DEFAULT uses the
                    client default

        Returns:
            The decoded CompletionResponse.

        Raises:
            GPTClientError: Any transport, status or decoding failure.
            TypeError: If prompt or model has an unsupported type; raised
                       before anything is sent, not wrapped.
        """
        request = build_completion_request(prompt, model, self.config.default_model)
        return await self._send(completion_descriptor(request))

    def curl(
        self,
        prompt: Union[str, CompletionRequest],
        model: ModelSelector = GPTModel.DEFAULT,
        pretty: bool = True,
        format_output: bool = True,
        redact: bool = False,
    ) -> str:
        """
        Render the request complete() would send as a curl command.

        Built through the same request construction and authentication
        as a real send; nothing is transmitted.

        Raises:
            TypeError: If prompt or model has an unsupported type.
        """
        request = build_completion_request(prompt, model, self.config.default_model)
        http_request = self._transport.build_request(completion_descriptor(request))
        return render_curl(
            http_request, pretty=pretty, format_output=format_output, redact=redact
        )

    async def _send(self, descriptor: RequestDescriptor) -> CompletionResponse:
        """Send, decode, and replace every failure with a GPTClientError."""
        logger.info(
            "completion requested",
            extra={"path": descriptor.path, "model": descriptor.body.model},
        )
        try:
            response = await self._transport.send(descriptor)
            return decode_response(response, CompletionResponse)
        except Exception as e:
            raise normalize_error(e) from e
