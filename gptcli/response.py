"""
Typed view of a chat completion reply.

The reply is treated as an untrusted document: every field is checked before it is
used, and anything that does not match the expected shape raises DecodeError.
Nothing is defaulted, since an empty command would otherwise reach the
confirmation prompt.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from .errors import DecodeError, OracleError

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class TranslationResult:
    """The translated command and the number of tokens the request used."""
    command: str
    total_tokens: Number


@dataclass(frozen=True)
class OracleErrorPayload:
    code: str
    message: str

    @classmethod
    def from_dict(cls, data: Any) -> "OracleErrorPayload":
        error = _require_mapping(data, "error")
        code = error.get("code")
        message = error.get("message")
        if code is not None and not isinstance(code, (str, int)):
            raise DecodeError(f"unexpected type for error.code: {type(code).__name__}")
        if not isinstance(message, str):
            raise DecodeError("missing or invalid field: error.message")
        return cls(code="" if code is None else str(code), message=message)


@dataclass(frozen=True)
class Usage:
    total_tokens: Number

    @classmethod
    def from_dict(cls, data: Any) -> "Usage":
        usage = _require_mapping(data, "usage")
        total_tokens = usage.get("total_tokens")
        # bool is an int subclass, but never a token count
        if isinstance(total_tokens, bool) or not isinstance(total_tokens, (int, float)):
            raise DecodeError("missing or invalid field: usage.total_tokens")
        return cls(total_tokens=total_tokens)


@dataclass(frozen=True)
class ChatCompletion:
    content: str
    usage: Usage

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatCompletion":
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise DecodeError("missing or empty field: choices")
        first = _require_mapping(choices[0], "choices[0]")
        message = _require_mapping(first.get("message"), "choices[0].message")
        content = message.get("content")
        if not isinstance(content, str):
            raise DecodeError("missing or invalid field: choices[0].message.content")
        if "usage" not in data:
            raise DecodeError("missing field: usage")
        return cls(content=content, usage=Usage.from_dict(data["usage"]))


def extract(reply: Any) -> TranslationResult:
    """
    Turn a decoded reply into a TranslationResult.

    Args:
        reply: The JSON-decoded body returned by the completion service.

    Returns:
        The first choice's content and the total token usage.

    Raises:
        OracleError: The reply carries an ``error`` object.
        DecodeError: The reply does not have the expected shape.
    """
    reply = _require_mapping(reply, "reply")
    if reply.get("error") is not None:
        payload = OracleErrorPayload.from_dict(reply["error"])
        logger.debug(f"oracle reported error {payload.code!r}: {payload.message}")
        raise OracleError(payload.code, payload.message)

    completion = ChatCompletion.from_dict(reply)
    command = completion.content
    if not command.strip():
        raise DecodeError("the model returned an empty command")
    logger.debug(f"usage: total_tokens={completion.usage.total_tokens}")
    return TranslationResult(command=command, total_tokens=completion.usage.total_tokens)


def _require_mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(f"missing or invalid field: {path}")
    return dict(value)
