# Logging adapter for library-wide logging
from httpdispatch.adapters.logging_adapter import LoggingAdapter

from pydantic import field_validator
from pydantic_settings import BaseSettings
from rich import print

from httpdispatch.core.interfaces.logging import LoggingPort

# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class DispatchSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }
    HTTPDISPATCH_LOG_LEVEL: str = "INFO"
    # aiohttp ClientTimeout fields, in seconds
    HTTPDISPATCH_TIMEOUT_TOTAL: float = 10.0
    HTTPDISPATCH_TIMEOUT_SOCK_CONNECT: float = 5.0
    HTTPDISPATCH_TIMEOUT_SOCK_READ: float = 10.0
    # Sent with every request unless the descriptor sets the same header
    HTTPDISPATCH_DEFAULT_HEADERS: dict[str, str] = {}
    HTTPDISPATCH_STRICT_DECODING: bool = True

    @field_validator("HTTPDISPATCH_LOG_LEVEL", mode="before")
    def normalize_log_level(cls, value: str) -> str:
        """Accept lower-case level names from the environment."""
        return str(value).upper().strip()

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("httpdispatch settings:")
        print(self)


app_settings = DispatchSettings()

logger: LoggingPort = LoggingAdapter("httpdispatch", app_settings.HTTPDISPATCH_LOG_LEVEL)
