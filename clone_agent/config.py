"""Configuration management for the Clone Agent."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class CloneConfig:
    """Configuration for the project clone export."""

    # Credentials and origin project; validated by the command, not here,
    # so that --help and argument errors never require a token.
    access_token: Optional[str] = None
    origin_project_id: Optional[str] = None

    # Output
    output_dir: str = "./terraform"
    output_filename: str = "project_clone.tf.json"
    rules_filename: str = "firestore.rules"

    # HTTP behaviour
    timeout: int = 30
    max_retries: int = 0
    max_requests_per_minute: int = 600

    # Pages fetched per Firestore listing; 0 means follow every page token
    max_list_pages: int = 1

    # Target placement defaults
    region: str = "nam5"
    zone: str = "us-central1-c"
    default_location_id: str = "us-central"

    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.max_requests_per_minute <= 0:
            raise ValueError("max_requests_per_minute must be positive")
        if self.max_list_pages < 0:
            raise ValueError("max_list_pages cannot be negative (use 0 for unlimited)")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(
                f"log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL, got {self.log_level!r}"
            )

        self.output_dir = os.path.expanduser(self.output_dir)

        # Normalize empty strings to None
        if self.access_token == "":
            self.access_token = None
        if self.origin_project_id == "":
            self.origin_project_id = None

    @property
    def output_path(self) -> Path:
        """Path of the generated Terraform document."""
        return Path(self.output_dir) / self.output_filename

    @property
    def rules_path(self) -> Path:
        """Path of the Firestore rules file referenced by the ruleset resource."""
        return Path(self.output_dir) / self.rules_filename

    @classmethod
    def from_env(cls, **overrides) -> "CloneConfig":
        """Create configuration from environment variables with optional overrides."""
        load_dotenv()

        config_dict = {
            "access_token": os.getenv("GOOGLE_OAUTH_ACCESS_TOKEN") or None,
            "origin_project_id": (
                os.getenv("FIREBASE_PROJECT") or os.getenv("GOOGLE_CLOUD_PROJECT") or None
            ),
            "output_dir": os.getenv("OUTPUT_DIR", "./terraform"),
            "output_filename": os.getenv("OUTPUT_FILENAME", "project_clone.tf.json"),
            "timeout": int(os.getenv("TIMEOUT", "30")),
            "max_retries": int(os.getenv("MAX_RETRIES", "0")),
            "max_requests_per_minute": int(os.getenv("MAX_REQUESTS_PER_MINUTE", "600")),
            "max_list_pages": int(os.getenv("MAX_LIST_PAGES", "1")),
            "region": os.getenv("CLONE_REGION", "nam5"),
            "zone": os.getenv("CLONE_ZONE", "us-central1-c"),
            "default_location_id": os.getenv("CLONE_DEFAULT_LOCATION_ID", "us-central"),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "json_logs": _env_bool("JSON_LOGS"),
        }

        # Apply overrides (filter out None values from CLI)
        for key, value in overrides.items():
            if value is not None:
                config_dict[key] = value

        return cls(**config_dict)
