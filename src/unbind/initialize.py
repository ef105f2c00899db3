# SPDX-License-Identifier: MIT

import logging

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from unbind import configuration
from unbind.context import AppContext, build_context
from unbind.logger import configure_logging
from unbind.model.entity_id import generate_entity_id
from unbind.repository.configuration import ConfigurationRepository

logger = logging.getLogger(__name__)


def initialize() -> AppContext:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_file()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    config_repo = ConfigurationRepository()
    config = config_repo.get_config()
    configure_logging(config["log_level"])

    context = build_context(config, config_repo, configuration.DATA_PATH)
    __ensure_local_user(context)
    return context


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_local_user(context: AppContext) -> None:
    """Without a backend, the first run creates a local user whose trial starts now."""
    if context.local_profiles is None:
        return

    user_id = context.config.get("user_id")
    if user_id is None:
        user_id = generate_entity_id()
        context.config_repo.update_config(user_id=user_id)
        context.config_repo.flush()
        context.config["user_id"] = user_id
        logger.info("created local user %s", user_id)

    context.local_profiles.start_trial(user_id)
