"""Exception hierarchy for discordapi.

Every custom exception inherits from DiscordAPIError so callers can
catch broadly, while subsystems raise precise subclasses carrying
structured context for logging.

There is no retryable/permanent classification: HTTP
failures carry the status code and Discord's error payload, and
callers that need finer behaviour inspect those directly.
"""

from typing import Any, Dict, List, Optional, Tuple, Union


class DiscordAPIError(Exception):
    """Base exception for all discordapi errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "command_loader").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


# ---------------------------------------------------------------------------
# Configuration exceptions
# ---------------------------------------------------------------------------

class ConfigurationError(DiscordAPIError):
    """Invalid or missing configuration. Fatal at startup.

    Attributes:
        setting_name: The environment variable or setting at fault.
    """

    def __init__(
        self,
        message: str = "",
        *,
        setting_name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.setting_name = setting_name
        super().__init__(message, module=module or "config", **context)


# ---------------------------------------------------------------------------
# Command registration exceptions
# ---------------------------------------------------------------------------

class CommandLoadError(DiscordAPIError):
    """A handler unit in the command directory could not be registered.

    Raised when the module fails to import, does not define the class
    name derived from its file name, or defines something that is not a
    Command.

    Attributes:
        path: Source file of the offending unit.
        expected: The class name the naming convention expected.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        expected: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.path = path
        self.expected = expected
        super().__init__(message, module=module or "command_loader", **context)


# ---------------------------------------------------------------------------
# REST exceptions
# ---------------------------------------------------------------------------

class _ItemsList(list):
    def items(self):
        for n, item in enumerate(self):
            yield str(n), item


def flatten_errors(
    d: Union[Dict[str, Any], _ItemsList], path: Optional[str] = None
) -> List[Tuple[str, Tuple[str, str]]]:
    """Flatten Discord's nested ``errors`` object into (path, (message, code))."""
    if path is None:
        path = ""

    items: List[Tuple[str, Tuple[str, str]]] = []
    for k, v in d.items():
        if k == "_errors":
            for item in v:
                items.append((path[1:], (item["message"], item["code"])))
        elif isinstance(v, dict):
            items.extend(flatten_errors(v, path + ":" + k))
        elif isinstance(v, list):
            items.extend(flatten_errors(_ItemsList(v), path + ":" + k))
    return items


class ClientException(DiscordAPIError):
    """Base class for REST client errors."""

    def __init__(self, message: str = "", *, module: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, module=module or "rest", **context)


class HTTPException(ClientException):
    """Discord answered with a non-2xx status.

    Attributes:
        code: The HTTP status code.
        data: Decoded JSON error payload, or the raw body text.
    """

    def __init__(self, code: int, data: Union[str, Dict[str, Any]]) -> None:
        self.code = code
        self.data = data
        super().__init__(f"HTTP {code}: {self.message_text}", status=code)

    @property
    def message_text(self) -> str:
        return self.discord_message or (self.data if isinstance(self.data, str) else "")

    @property
    def discord_message(self) -> Optional[str]:
        """Error message sent by discord."""
        if isinstance(self.data, dict):
            return self.data.get("message")
        return None

    @property
    def errno(self) -> Optional[int]:
        """Discord's JSON error code."""
        if isinstance(self.data, dict):
            return self.data.get("code")
        return None

    @property
    def errors(self) -> Optional[str]:
        """Field errors, one ``path (code): message`` per line."""
        if isinstance(self.data, dict):
            if "errors" not in self.data:
                return None
            text = "\n".join(
                f"{item} ({code}): {message}"
                for item, (message, code) in flatten_errors(self.data["errors"])
            )
            return text.strip()
        return self.data


class ResponseDecodeError(ClientException):
    """A successful response carried a body that is not valid JSON.

    Attributes:
        code: The HTTP status code.
        body: The raw response text.
    """

    def __init__(self, code: int, body: str) -> None:
        self.code = code
        self.body = body
        super().__init__("response body is not valid JSON", status=code)
