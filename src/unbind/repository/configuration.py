# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from unbind import configuration


class ConfigurationRepository:
    def __init__(self, config_path: Path = configuration.APP_CONFIG_PATH) -> None:
        self._config_path = config_path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(self._config_path.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError(f"configuration file {self._config_path} is empty")

        # Backfill keys added after the file was first written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        self._config_path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        timezone: Optional[str] = None,
        session_day_timezone: Optional[str] = None,
        language: Optional[str] = None,
        log_level: Optional[str] = None,
        backend_url: Optional[str] = None,
        remove_backend_url: bool = False,
        backend_anon_key: Optional[str] = None,
        remove_backend_anon_key: bool = False,
        request_timeout: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if timezone is not None:
            self.config["timezone"] = timezone
        if session_day_timezone is not None:
            self.config["session_day_timezone"] = session_day_timezone
        if language is not None:
            self.config["language"] = language
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if backend_url is not None:
            self.config["backend_url"] = backend_url.rstrip("/")
        if remove_backend_url:
            self.config["backend_url"] = None
        if backend_anon_key is not None:
            self.config["backend_anon_key"] = backend_anon_key
        if remove_backend_anon_key:
            self.config["backend_anon_key"] = None
        if request_timeout is not None:
            self.config["request_timeout"] = request_timeout
        if user_id is not None:
            self.config["user_id"] = user_id
