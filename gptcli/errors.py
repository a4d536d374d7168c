"""Error types raised along the translate-and-run pipeline."""

from typing import Optional

API_KEY_INFO = (
    "Goto https://platform.openai.com/account/api-keys to get your API key. "
    "Set the API key on CLI by 'export OPENAI_API_KEY=key' on Linux and MacOS "
    "or $Env:OPENAI_API_KEY = 'key' on Windows PowerShell"
)


class GptCliError(Exception):
    """Base class for all errors reported to the user."""


class ConfigurationError(GptCliError):
    """Raised when the configuration is missing or invalid."""

    def __init__(self, message: str, remediation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.remediation = remediation

    def __str__(self) -> str:
        if self.remediation:
            return f"{self.message} {self.remediation}"
        return self.message


class TransportError(GptCliError):
    """Raised when the completion service could not be reached."""


class OracleError(GptCliError):
    """Raised when the completion service answered with an error object."""

    def __init__(self, code: str, message: str):
        super().__init__(f"Error code {code}: {message}")
        self.code = code
        self.message = message


class DecodeError(GptCliError):
    """Raised when the reply does not have the expected shape."""


class UnsupportedShellError(GptCliError):
    """Raised when there is no launcher for the platform and shell pair."""

    def __init__(self, platform: str, shell_name: str):
        super().__init__(f"Error: unsupported shell {shell_name or '<unknown>'} on {platform}")
        self.platform = platform
        self.shell_name = shell_name


class ExecutionError(GptCliError):
    """Raised when the confirmed command failed to start or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode
