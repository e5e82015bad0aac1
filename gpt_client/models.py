"""
Model selection.

A model selector is either a known GPTModel variant or any custom model
name string. GPTModel.DEFAULT is a marker, not a model: it means "use the
client's configured default" and is resolved when the request is built.
"""

from enum import Enum
from typing import Union


class GPTModel(str, Enum):
    """Completion models known to the client."""

    DAVINCI = "text-davinci-003"
    CURIE   = "text-curie-001"
    BABBAGE = "text-babbage-001"
    ADA     = "text-ada-001"

    # Marker resolved to the client default; never sent over the wire
    DEFAULT = "<default>"


ModelSelector = Union[GPTModel, str]

LIBRARY_DEFAULT_MODEL = GPTModel.DAVINCI


def is_default_marker(selector: ModelSelector) -> bool:
    return selector is GPTModel.DEFAULT or selector == GPTModel.DEFAULT.value


def model_name(selector: ModelSelector) -> str:
    """Wire name of a concrete selector."""
    if is_default_marker(selector):
        raise ValueError("the default-model marker has no wire name")
    if isinstance(selector, GPTModel):
        return selector.value
    return selector


def resolve_model(selector: ModelSelector, default: ModelSelector) -> str:
    """
    Substitute the default marker with the client default.

    Args:
        selector: Model requested by the caller (possibly the marker)
        default:  The client's configured default model

    Returns:
        The wire model name.

    Raises:
        ValueError: If both selector and default are the marker.
    """
    if is_default_marker(selector):
        return model_name(default)
    return model_name(selector)
