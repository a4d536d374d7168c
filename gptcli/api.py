import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_API_URL, DEFAULT_MAX_TOKENS, DEFAULT_TIMEOUT
from .errors import API_KEY_INFO, ConfigurationError, DecodeError, TransportError
from .response import TranslationResult, extract
from .shell_context import ShellContext

# Configure logging
logger = logging.getLogger(__name__)


def build_prompt(pseudo_command: str, ctx: ShellContext) -> str:
    """Constructs the translation prompt for a pseudo command."""
    return (
        f"Convert this pseudo command into a real command that can be run on "
        f"{ctx.platform.value} and {ctx.shell_name} command shell. Note that the command "
        "might include misspelled, invalid or imagined arguments or even imagined program "
        "names. Try your best to convert it into an actual command that would do what the "
        "command seems to be intended to do.\n\n"
        f"{pseudo_command}\n\n"
        "Respond only with the command, without any explanation or markdown formatting."
    )


@dataclass(frozen=True)
class TranslationRequest:
    """A single chat completion request for one pseudo command."""

    model: str
    pseudo_command: str
    shell_context: ShellContext
    max_tokens: int = DEFAULT_MAX_TOKENS

    def to_payload(self) -> Dict[str, Any]:
        """Serializes the request to the chat completions wire format."""
        return {
            "model": self.model,
            "messages": [
                {"role": "user", "content": build_prompt(self.pseudo_command, self.shell_context)},
            ],
            "max_tokens": self.max_tokens,
        }


class OracleClient:
    """A client for the OpenAI chat completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Initializes the OracleClient.

        Args:
            api_key: The OpenAI API key.
            api_url: The chat completions endpoint.
            timeout: Seconds to wait for the service before giving up.
            max_tokens: Upper bound on tokens the model may spend on the answer.
        """
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.max_tokens = max_tokens

    def translate(self, pseudo_command: str, ctx: ShellContext, model: str) -> TranslationResult:
        """
        Translates a pseudo command into a real command for the given shell context.

        Exactly one HTTP request is made per call; failures are not retried.

        Raises:
            ConfigurationError: No API key is configured.
            TransportError: The service could not be reached or timed out.
            OracleError: The service answered with an error object.
            DecodeError: The answer did not have the expected shape.
        """
        if not self.api_key:
            raise ConfigurationError("Error: OPENAI_API_KEY is not set.", API_KEY_INFO)

        request = TranslationRequest(
            model=model,
            pseudo_command=pseudo_command,
            shell_context=ctx,
            max_tokens=self.max_tokens,
        )
        payload = request.to_payload()
        logger.debug(f"API URL: {self.api_url}")
        logger.debug(f"payload: {payload}")

        reply = self._send_request(payload)
        logger.debug(f"result: {reply}")
        return extract(reply)

    def _send_request(self, payload: Dict[str, Any]) -> Any:
        """Sends the payload and returns the decoded JSON body."""
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Request to {self.api_url} timed out: {e}")
            raise TransportError(f"Error: request timed out after {self.timeout:g}s: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling the completion API: {e}")
            raise TransportError(f"Error: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            if not response.ok:
                raise TransportError(f"Error: HTTP {response.status_code} {response.reason}") from e
            logger.error(f"Failed to parse JSON response: '{response.text[:200]}'. Error: {e}")
            raise DecodeError("Error reading response: the body is not valid JSON") from e
