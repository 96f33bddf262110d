"""Settings read from BREV_SSH_* environment variables."""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENV_PREFIX = "BREV_SSH_"


@dataclass
class Settings:
    """Raw settings as found in the environment.

    Paths are kept as strings; Config expands them. Unset or invalid values
    fall back to the defaults below.
    """

    # Files
    ssh_config_path: str = field(default="~/.ssh/config")
    brev_dir: str = field(default="~/.brev")
    private_key_path: str = field(default="")
    private_key_material: str | None = field(default=None, repr=False)
    backup: bool = field(default=False)

    # Port allocation
    port_base: int = field(default=2222)
    port_ceiling: int = field(default=65535)

    # Inventory
    api_url: str = field(default="")
    api_token: str = field(default="", repr=False)
    org_id: str = field(default="")
    workspaces: list[str] = field(default_factory=list)
    request_timeout: int = field(default=30)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from BREV_SSH_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            ssh_config_path=cls._get_str("SSH_CONFIG", "~/.ssh/config"),
            brev_dir=cls._get_str("BREV_DIR", "~/.brev"),
            private_key_path=cls._get_str("PRIVATE_KEY", ""),
            private_key_material=os.getenv(ENV_PREFIX + "PRIVATE_KEY_MATERIAL") or None,
            backup=cls._get_bool("BACKUP", False),
            port_base=cls._get_int("PORT_BASE", 2222),
            port_ceiling=cls._get_int("PORT_CEILING", 65535),
            api_url=cls._get_str("API_URL", ""),
            api_token=cls._get_str("API_TOKEN", ""),
            org_id=cls._get_str("ORG_ID", ""),
            workspaces=cls._get_list("WORKSPACES"),
            request_timeout=cls._get_int("REQUEST_TIMEOUT", 30),
            transport=cls._get_transport(),
            http_host=cls._get_str("HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("HTTP_PORT", 8000),
            log_level=cls._get_str("LOG_LEVEL", "INFO").upper(),
            log_payloads=cls._get_bool("LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_str(key: str, default: str) -> str:
        value = os.getenv(ENV_PREFIX + key, "").strip()
        return value or default

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Variable name without the BREV_SSH_ prefix
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        name = ENV_PREFIX + key
        value = os.getenv(name)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", name, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_list(key: str) -> list[str]:
        """Get comma-separated list from environment (empty if not set)."""
        value = os.getenv(ENV_PREFIX + key, "").strip()
        if not value:
            return []
        return [item.strip() for item in value.split(",") if item.strip()]

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv(ENV_PREFIX + "TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
