"""
Tests for configuration loading and validation.
"""

import pytest
from pydantic import ValidationError

from parkslot.config import AppConfig, UserConfig
from parkslot.domain.models import Role

CONFIG_YAML = """
booking_window_days: 3
places: [1, 2, 3]
timezone: Europe/Prague
database_url: sqlite:///test.db
store:
  max_attempts: 5
users:
  - id: 1
    username: admin
    role: admin
  - id: 2
    username: Jana
    name: Jana Nováková
    plate: 1AB 2345
    priority: true
"""


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")

        config = AppConfig.load_from_yaml(path)

        assert config.booking_window_days == 3
        assert config.places == [1, 2, 3]
        assert config.store.max_attempts == 5
        assert config.store.retry_delay_seconds == 0.05
        assert [u.username for u in config.users] == ["admin", "Jana"]

    def test_defaults(self):
        config = AppConfig()

        assert config.booking_window_days == 2
        assert config.places == [1, 2, 3, 4, 5, 6]
        assert config.users == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("places: [1, 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"booking_window_days": 0},
            {"places": []},
            {"places": [1, 1]},
            {"places": [0, 1]},
            {"store": {"max_attempts": 0}},
            {"users": [{"id": 1, "username": "a"}, {"id": 1, "username": "b"}]},
            {"users": [{"id": 1, "username": "a"}, {"id": 2, "username": "A"}]},
        ],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ValidationError):
            AppConfig(**data)


class TestUsers:
    """Tests for roster lookups."""

    def _config(self) -> AppConfig:
        return AppConfig(
            users=[
                UserConfig(id=1, username="admin", role=Role.ADMIN),
                UserConfig(id=2, username="jana", name="Jana", plate="1AB 2345", priority=True),
            ]
        )

    def test_resolve_user(self):
        user = self._config().resolve_user("JANA")

        assert user.id == 2
        assert user.priority
        assert user.display_name == "Jana"
        assert user.plate_number == "1AB 2345"

    def test_display_name_falls_back_to_username(self):
        user = self._config().resolve_user("admin")

        assert user.display_name == "admin"
        assert user.is_admin

    def test_unknown_user(self):
        with pytest.raises(ValueError, match="Unknown user"):
            self._config().resolve_user("nobody")

    def test_lookups(self):
        config = self._config()

        assert config.find_user_by_id(2).username == "jana"
        assert config.find_user_by_id(3) is None
        assert [u.id for u in config.roster()] == [1, 2]
