"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import Role, User


class StoreConfig(BaseModel):
    """Retry behaviour of the persistent reservation store."""
    max_attempts: int = 3
    retry_delay_seconds: float = 0.05

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, value: int) -> int:
        """Ensure at least one attempt is made."""
        if value < 1:
            raise ValueError("max_attempts must be at least 1")
        return value

    @field_validator("retry_delay_seconds")
    @classmethod
    def validate_delay(cls, value: float) -> float:
        if value < 0:
            raise ValueError("retry_delay_seconds must not be negative")
        return value


class UserConfig(BaseModel):
    """Roster entry as provided by the identity provider."""
    id: int
    username: str
    name: str = ""
    plate: str = ""  # licence plate shown in the grid
    role: Role = Role.USER
    priority: bool = False

    def to_user(self) -> User:
        """Build the domain user the engine works with."""
        return User(
            id=self.id,
            role=self.role,
            priority=self.priority,
            display_name=self.name or self.username,
            plate_number=self.plate,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    booking_window_days: int = 2
    places: List[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5, 6])
    timezone: str = "Europe/Prague"
    database_url: str = "sqlite:///parkslot.db"
    store: StoreConfig = Field(default_factory=StoreConfig)
    users: List[UserConfig] = Field(default_factory=list)

    @field_validator("booking_window_days")
    @classmethod
    def validate_window(cls, value: int) -> int:
        """Ensure the advance-booking window is positive."""
        if value <= 0:
            raise ValueError("booking_window_days must be greater than zero")
        return value

    @field_validator("places")
    @classmethod
    def validate_places(cls, value: List[int]) -> List[int]:
        """Ensure places are positive and unique."""
        if not value:
            raise ValueError("At least one parking place must be configured")
        invalid = [place for place in value if place <= 0]
        if invalid:
            raise ValueError(f"places must be positive numbers, got {invalid}")
        if len(set(value)) != len(value):
            raise ValueError(f"Duplicate parking place in {value}")
        return value

    @field_validator("users")
    @classmethod
    def validate_users(cls, value: List[UserConfig]) -> List[UserConfig]:
        """Ensure user ids and usernames are unique."""
        seen_ids: set[int] = set()
        seen_names: set[str] = set()
        for user in value:
            name_key = user.username.lower()
            if user.id in seen_ids:
                raise ValueError(f"Duplicate user id detected: {user.id}")
            if name_key in seen_names:
                raise ValueError(f"Duplicate username detected: {user.username}")
            seen_ids.add(user.id)
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def find_user_by_username(self, username: str) -> UserConfig | None:
        """Find a roster entry by username (case-insensitive)."""
        for user in self.users:
            if user.username.lower() == username.lower():
                return user
        return None

    def find_user_by_id(self, user_id: int) -> UserConfig | None:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def resolve_user(self, username: str) -> User:
        """
        Resolve a username to the domain user acting in this session.

        Raises:
            ValueError: If the username is not in the roster
        """
        entry = self.find_user_by_username(username)
        if entry is None:
            raise ValueError(
                f"Unknown user: '{username}'. "
                f"Use one of the configured usernames."
            )
        return entry.to_user()

    def roster(self) -> List[User]:
        """All configured users as domain objects."""
        return [user.to_user() for user in self.users]


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
