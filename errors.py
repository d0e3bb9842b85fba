"""
PPQ Assistant Error Types
Human-readable failures raised by config loading, the API client and the executor.
"""

from typing import Optional


class AssistantError(Exception):
    """Base error carrying a message and an optional remediation hint"""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigMissing(AssistantError):
    """Config file does not exist"""


class ConfigParseError(AssistantError):
    """Config file exists but cannot be used"""


class TransportError(AssistantError):
    """Network, HTTP status or response decoding failure"""


class UnsupportedLanguage(AssistantError):
    """Fence tag has no interpreter in the registry"""

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language}")
        self.language = language


class ChildSpawnError(AssistantError):
    """Interpreter process could not be started"""

    def __init__(self, interpreter: str, reason: str):
        super().__init__(
            f"Could not start '{interpreter}': {reason}",
            hint=f"Make sure '{interpreter}' is installed and on your PATH.",
        )
        self.interpreter = interpreter
