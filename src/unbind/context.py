# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from unbind import time
from unbind.client.analysis import AnalysisClient
from unbind.client.auth import AuthSession
from unbind.client.profile import SupabaseProfileRepository
from unbind.configuration import Configuration
from unbind.errors import ConfigurationError
from unbind.repository.achievement import AchievementRepository
from unbind.repository.configuration import ConfigurationRepository
from unbind.repository.entry import EntryRepository
from unbind.repository.key_value import KeyValueStore
from unbind.repository.profile import LocalProfileRepository, ProfileRepository
from unbind.repository.user_stats import UserStatsRepository
from unbind.repository.weekly_summary import WeeklySummaryRepository
from unbind.service.access import AccessGate


@dataclass
class AppContext:
    """
    Everything a command needs, built once at start-up and passed down.

    With a backend configured, profiles and analysis go to the backend;
    otherwise profiles are kept locally and recording is unavailable.
    """

    config: Configuration
    config_repo: ConfigurationRepository
    store: KeyValueStore
    entries: EntryRepository
    weekly_summaries: WeeklySummaryRepository
    user_stats: UserStatsRepository
    achievements: AchievementRepository
    profiles: ProfileRepository
    access_gate: AccessGate
    clock: time.Clock
    show_header: bool = True
    http: Optional[requests.Session] = None
    auth: Optional[AuthSession] = None
    analysis: Optional[AnalysisClient] = None
    local_profiles: Optional[LocalProfileRepository] = None

    def current_user_id(self) -> str:
        if self.auth is not None:
            return self.auth.get_valid_session()["user_id"]
        user_id = self.config.get("user_id")
        if user_id is None:
            raise ConfigurationError("no local user has been created")
        return user_id

    def require_analysis(self) -> AnalysisClient:
        if self.analysis is None:
            raise ConfigurationError(
                "recording needs a backend: set backend_url and backend_anon_key"
            )
        return self.analysis

    def close(self) -> None:
        self.config_repo.flush()
        if self.http is not None:
            self.http.close()


def build_context(
    config: Configuration,
    config_repo: ConfigurationRepository,
    data_path: Path,
    clock: time.Clock = time.now_utc,
    http: Optional[requests.Session] = None,
) -> AppContext:
    store = KeyValueStore(data_path)
    entries = EntryRepository(store, clock, config["timezone"])
    weekly_summaries = WeeklySummaryRepository(store, clock)
    user_stats = UserStatsRepository(store, clock)
    achievements = AchievementRepository(store, clock)

    backend_url = config["backend_url"]
    anon_key = config["backend_anon_key"]
    timeout = config["request_timeout"]

    if backend_url is not None and anon_key is not None:
        http = http if http is not None else requests.Session()
        auth = AuthSession(http, backend_url, anon_key, store, timeout)
        profiles: ProfileRepository = SupabaseProfileRepository(
            http, backend_url, auth, timeout
        )
        return AppContext(
            config=config,
            config_repo=config_repo,
            store=store,
            entries=entries,
            weekly_summaries=weekly_summaries,
            user_stats=user_stats,
            achievements=achievements,
            profiles=profiles,
            access_gate=AccessGate(
                profiles, clock, config["session_day_timezone"], counts_sessions=False
            ),
            clock=clock,
            show_header=config["show_header"],
            http=http,
            auth=auth,
            analysis=AnalysisClient(http, backend_url, auth, timeout),
        )

    local_profiles = LocalProfileRepository(store, clock)
    return AppContext(
        config=config,
        config_repo=config_repo,
        store=store,
        entries=entries,
        weekly_summaries=weekly_summaries,
        user_stats=user_stats,
        achievements=achievements,
        profiles=local_profiles,
        access_gate=AccessGate(local_profiles, clock, config["session_day_timezone"]),
        clock=clock,
        show_header=config["show_header"],
        local_profiles=local_profiles,
    )
