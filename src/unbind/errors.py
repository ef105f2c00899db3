# SPDX-License-Identifier: MIT


class UnbindError(Exception):
    """Base class for errors surfaced to the caller."""

    pass


class StorageError(UnbindError):
    """Raised when the local store cannot be written, or read for a mutation."""

    pass


class ProfileError(UnbindError):
    """Raised when the profile collaborator fails."""

    pass


class ConfigurationError(UnbindError):
    pass


class AnalysisError(UnbindError):
    """Raised when the remote analysis call fails."""

    pass


class TrialExpiredError(AnalysisError):
    def __init__(self) -> None:
        super().__init__("TRIAL_EXPIRED")


class DailyLimitReachedError(AnalysisError):
    def __init__(self, sessions_today: int, max_sessions: int) -> None:
        self.sessions_today = sessions_today
        self.max_sessions = max_sessions
        super().__init__(f"LIMIT_REACHED:{sessions_today}:{max_sessions}")


class AuthenticationError(UnbindError):
    """Raised when no backend session can be obtained."""

    pass
