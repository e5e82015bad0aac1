"""
Curl rendering for debugging.

Renders an already-built httpx request (authenticated by the same code
path as a real send) as a shell command. Never touches the network.
"""

import shlex
from typing import List

import httpx

# Headers curl derives on its own; a stale Content-Length would break the
# command once someone edits the body. Accept-Encoding becomes --compressed,
# which negotiates the same encodings and decodes the response.
_CURL_MANAGED_HEADERS = frozenset({"host", "content-length", "accept-encoding", "connection"})

REDACTED_BEARER = "Bearer $OPENAI_API_KEY"


def render_curl(
    request: httpx.Request,
    pretty: bool = True,
    format_output: bool = True,
    redact: bool = False,
) -> str:
    """
    Turn a request into a curl command you can paste into a terminal.

    Args:
        request:       The fully built, authenticated request
        pretty:        Put each option on its own continuation line
        format_output: Pipe the response through `json_pp`
        redact:        Replace the bearer token with $OPENAI_API_KEY

    Returns:
        The curl command.
    """
    parts: List[str] = ["curl", f"-X {request.method}", shlex.quote(str(request.url))]

    for name, value in request.headers.items():
        if name.lower() in _CURL_MANAGED_HEADERS:
            continue
        if redact and name.lower() == "authorization":
            # Double quotes so the shell still expands the variable
            parts.append(f'-H "{name}: {REDACTED_BEARER}"')
            continue
        parts.append("-H " + shlex.quote(f"{name}: {value}"))

    if "accept-encoding" in request.headers:
        parts.append("--compressed")

    body = request.content
    if body:
        parts.append("-d " + shlex.quote(body.decode("utf-8")))

    separator = " \\\n\t" if pretty else " "
    command = separator.join(parts)
    if format_output:
        command += " | json_pp"
    return command
