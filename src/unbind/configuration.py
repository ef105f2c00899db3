# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "unbind"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# Replaced by load_data_path_configuration() when data_path is configured
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

ENTRIES_KEY = "entries"
WEEKLY_SUMMARY_LAST_SHOWN_KEY = "weekly_summary_last_shown"
WEEKLY_SUMMARIES_KEY = "weekly_summaries"
PROFILES_KEY = "profiles"
AUTH_SESSION_KEY = "auth_session"
ACHIEVEMENTS_KEY = "achievements_progress"
USER_STATS_KEY = "user_stats"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    timezone: str
    session_day_timezone: str
    language: str
    log_level: str
    backend_url: Optional[str]
    backend_anon_key: Optional[str]
    request_timeout: int
    user_id: NotRequired[Optional[str]]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "timezone": "local",
        "session_day_timezone": "UTC",
        "language": "en",
        "log_level": "WARNING",
        "backend_url": None,
        "backend_anon_key": None,
        "request_timeout": 60,
        "user_id": None,
    }


def load_data_path_configuration(config_path: Path = APP_CONFIG_PATH) -> None:
    """
    Load the configuration and set DATA_PATH dynamically.

    This must be called after the config file exists and before the
    application context is built.
    """
    global DATA_PATH

    if not config_path.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(config_path.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
