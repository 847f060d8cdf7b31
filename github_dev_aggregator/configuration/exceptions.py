"""Contains exceptions raised when reconciling application configuration."""


class InvalidConfigurationError(Exception):
    """Raised when a configuration element has an unusable value."""

    def __init__(self, name: str, env_name: str, reason: str, cli_name: str | None = None) -> None:
        """Initializes the exception with the offending element and why it was rejected."""
        sources = f"environment variable {env_name}"
        if cli_name:
            sources = f"command line option {cli_name}, {sources}"
        super().__init__(f"Invalid configuration element {name} ({sources}): {reason}")
        self.name = name
        self.env_name = env_name
        self.cli_name = cli_name
        self.reason = reason
