"""
Streamed completions.

Exposes the same call shapes as GPT.complete(), but returns an async
iterator of text chunks produced as the model generates them.

Contract:
- Lazy: nothing is sent until the first chunk is requested
- Ordered: chunks arrive exactly in upstream order
- Single use: iterate once; request a new iterator per call
- Error-terminated: a failure is raised from the iterator, as a
  GPTClientError, after every chunk produced before it
- Cancellation closes the HTTP response and is never swallowed
"""

import logging
from typing import AsyncIterator, Union

from .config import ClientConfig
from .decoding import iter_completion_chunks
from .errors import normalize_error
from .models import GPTModel, ModelSelector
from .request_builder import build_completion_request, completion_descriptor
from .transport import TransportAdapter
from .types import CompletionRequest, RequestDescriptor

logger = logging.getLogger(__name__)


class StreamedAnswer:
    """
    Streaming variant of the GPT facade.

    Obtained from GPT.streamed_answer; shares the client's transport and
    configuration.
    """

    def __init__(self, transport: TransportAdapter, config: ClientConfig):
        self._transport = transport
        self._config = config

    def complete(
        self,
        prompt: Union[str, CompletionRequest],
        model: ModelSelector = GPTModel.DEFAULT,
    ) -> AsyncIterator[str]:
        """
        Stream a completion.

        Args:
            prompt: The prompt to complete, or a full CompletionRequest
            model:  Model for a plain prompt; GPTModel.DEFAULT uses the
                    client default

        Returns:
            An async iterator of text chunks.

        Raises:
            TypeError: Immediately, if prompt or model has an unsupported
                       type. Failures once iteration starts are
                       GPTClientError.
        """
        request = build_completion_request(prompt, model, self._config.default_model)
        streamed = request.model_copy(update={"stream": True})
        return self._stream(completion_descriptor(streamed))

    async def _stream(self, descriptor: RequestDescriptor) -> AsyncIterator[str]:
        logger.info(
            "streamed completion requested",
            extra={"path": descriptor.path, "model": descriptor.body.model},
        )
        count = 0
        try:
            async with self._transport.stream(descriptor) as response:
                async for chunk in iter_completion_chunks(response):
                    count += 1
                    yield chunk
        except Exception as e:
            raise normalize_error(e) from e
        logger.info("streamed completion finished", extra={"chunk_count": count})
