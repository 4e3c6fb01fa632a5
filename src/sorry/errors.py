"""Error kinds surfaced to the user. Every one of them ends the invocation."""


class SorryError(Exception):
    """Base for errors the CLI reports as `Error: <message>` and exit 1."""


class ConfigMissingProvider(SorryError):
    def __init__(self) -> None:
        super().__init__(
            "No provider configured. Run 'sorry --config-openai' or 'sorry --config-groq' first."
        )


class ProviderNotFound(SorryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Provider '{name}' not found in config.")


class ApiKeyUnset(SorryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"API key not set for provider '{name}'. Run 'sorry --config-{name}' to configure."
        )


class ConfigSaveError(SorryError):
    def __init__(self, path, reason: Exception) -> None:
        self.path = path
        super().__init__(f"Could not write config to {path}: {reason}")


class NetworkFailure(SorryError):
    def __init__(self, url: str, reason: Exception) -> None:
        self.url = url
        super().__init__(f"Request to {url} failed: {reason}")


class ApiError(SorryError):
    """The API answered non-2xx with a structured `{"error": {"message"}}` body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(f"API error: {message}")


class ApiStatusError(SorryError):
    """The API answered non-2xx with a body we could not interpret."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.body = body
        status = f"{status_code} {reason}".strip()
        super().__init__(f"API request failed with status {status}: {body}")


class ResponseParseFailure(SorryError):
    def __init__(self, reason: str, body: str) -> None:
        self.body = body
        super().__init__(f"Failed to parse API response: {reason}. Body: {body}")


class EmptyResponse(SorryError):
    def __init__(self) -> None:
        super().__init__("No response from API")


class EmptyPromptInput(SorryError):
    def __init__(self) -> None:
        super().__init__(
            "Nothing to send. Usage: sorry <your message about what went wrong>\n"
            "       sorry --config-openai\n"
            "       sorry --config-groq\n"
            "       sorry --behaviour\n"
            "       sorry --show-config"
        )


class EmptyApiKeyInput(SorryError):
    def __init__(self) -> None:
        super().__init__("API key cannot be empty.")


class InvalidApiKeyInput(SorryError):
    def __init__(self) -> None:
        super().__init__("API key may only contain ASCII characters. Check for stray pasted characters.")


class InvalidProviderSettings(SorryError):
    """The stored base URL or API key cannot be turned into an HTTP request."""

    def __init__(self, reason: Exception) -> None:
        super().__init__(f"Invalid provider settings: {reason}. Reconfigure with 'sorry --config-<provider>'.")
