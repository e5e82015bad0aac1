"""
tests/unit/test_curl.py

Tests for curl rendering.

Verifies:
✔ Rendering never touches the network
✔ Rendered URL, method, headers and body equal what complete() transmits
✔ Default model shown resolved, never as the marker
✔ pretty / format_output / redact options
✔ Accept-Encoding rendered as --compressed
"""

import shlex

import httpx
import pytest

from gpt_client import CompletionRequest, GPTModel, render_curl


def must_not_send(request):
    raise AssertionError("curl rendering must not send a request")


class TestCurlRendering:
    def test_rendering_sends_nothing(self, make_client, sent_requests):
        gpt = make_client(must_not_send)
        gpt.curl("Say hello")
        assert sent_requests == []

    def test_shows_resolved_default_model(self, make_client):
        gpt = make_client(must_not_send, default_model=GPTModel.CURIE)
        command = gpt.curl("Say hello")

        assert '"model":"text-curie-001"' in command.replace(" ", "")
        assert "<default>" not in command

    def test_compact_command_shape(self, make_client, api_key):
        gpt = make_client(must_not_send)
        command = gpt.curl("Say hello", pretty=False, format_output=False)

        assert command.startswith("curl -X POST https://api.openai.com/v1/completions ")
        assert f"-H 'authorization: Bearer {api_key}'" in command
        assert "-H 'content-type: application/json'" in command
        assert "\n" not in command
        assert "json_pp" not in command

    def test_pretty_command_uses_continuation_lines(self, make_client):
        gpt = make_client(must_not_send)
        command = gpt.curl("Say hello", pretty=True, format_output=True)

        lines = command.split(" \\\n\t")
        assert lines[0] == "curl"
        assert lines[1] == "-X POST"
        assert command.endswith(" | json_pp")

    def test_redacted_command_hides_key(self, make_client, api_key):
        gpt = make_client(must_not_send)
        command = gpt.curl("Say hello", redact=True)

        assert api_key not in command
        assert '-H "authorization: Bearer $OPENAI_API_KEY"' in command

    def test_body_with_quotes_is_shell_safe(self, make_client):
        gpt = make_client(must_not_send)
        command = gpt.curl("It's a 'quoted' prompt", pretty=False, format_output=False)

        tokens = shlex.split(command)
        body = tokens[tokens.index("-d") + 1]
        assert "It's a 'quoted' prompt" in body

    def test_model_alongside_custom_request_rejected(self, make_client):
        gpt = make_client(must_not_send)
        with pytest.raises(TypeError):
            gpt.curl(CompletionRequest(model="text-ada-001", prompt="Hi"), model=GPTModel.ADA)

    def test_client_request_rendered_with_compressed_flag(self, make_client):
        gpt = make_client(must_not_send)
        tokens = shlex.split(gpt.curl("Say hello", pretty=False, format_output=False))

        assert "--compressed" in tokens
        assert not any(token.lower().startswith("accept-encoding") for token in tokens)

    def test_non_string_prompt_rejected(self, make_client):
        gpt = make_client(must_not_send)
        with pytest.raises(TypeError):
            gpt.curl(123)


class TestCurlParity:
    """The rendered command reproduces the request complete() sends."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "prompt",
        [
            "Say hello",
            CompletionRequest(model="text-ada-001", prompt="Hi", max_tokens=7, stop=["\n"]),
        ],
    )
    async def test_matches_transmitted_request(self, make_client, sent_requests, completion_body, prompt):
        gpt = make_client(lambda request: httpx.Response(200, json=completion_body()))
        await gpt.complete(prompt)
        sent = sent_requests[0]

        tokens = shlex.split(gpt.curl(prompt, pretty=False, format_output=False))

        assert tokens[tokens.index("-X") + 1] == sent.method
        assert tokens[3] == str(sent.url)
        assert tokens[tokens.index("-d") + 1].encode("utf-8") == sent.content

        rendered_headers = {
            tokens[i + 1].split(": ", 1)[0]: tokens[i + 1].split(": ", 1)[1]
            for i, token in enumerate(tokens)
            if token == "-H"
        }
        expected_headers = {
            name: value
            for name, value in sent.headers.items()
            if name not in {"host", "content-length", "accept-encoding", "connection"}
        }
        assert rendered_headers == expected_headers
        assert ("--compressed" in tokens) == ("accept-encoding" in sent.headers)


class TestRenderCurl:
    def test_renders_plain_request(self):
        request = httpx.Request(
            "GET", "https://example.com/v1/models", headers={"x-trace": "abc"}
        )
        assert render_curl(request, pretty=False, format_output=False) == (
            "curl -X GET https://example.com/v1/models -H 'x-trace: abc'"
        )

    def test_accept_encoding_becomes_compressed_flag(self):
        request = httpx.Request(
            "GET",
            "https://example.com/v1/models",
            headers={"accept-encoding": "gzip, deflate"},
        )
        tokens = shlex.split(render_curl(request, pretty=False, format_output=False))

        assert "--compressed" in tokens
        assert "-H" not in tokens
