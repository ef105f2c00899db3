"""Tests for plan limits, trial arithmetic and price display."""

from conftest import NOW
from unbind.service.plans import (
    PREMIUM,
    TRIAL,
    format_price,
    get_remaining_trial_days,
    get_session_limits,
    has_reached_daily_limit,
    is_in_trial_period,
)


class TestTrialPeriod:
    """Trial window arithmetic in whole elapsed days."""

    def test_no_trial_start(self):
        """Without a start date there is no trial yet, and all days remain."""
        assert is_in_trial_period(None, NOW) is False
        assert get_remaining_trial_days(None, NOW) == TRIAL["duration_days"]

    def test_trial_just_started(self):
        """A trial started now has every day left."""
        assert is_in_trial_period(NOW, NOW) is True
        assert get_remaining_trial_days(NOW, NOW) == 3

    def test_partial_days_are_not_counted(self):
        """Elapsed time is floored to whole days."""
        start = NOW.subtract(days=2, hours=23)
        assert is_in_trial_period(start, NOW) is True
        assert get_remaining_trial_days(start, NOW) == 1

    def test_trial_ends_after_three_days(self):
        """Exactly three elapsed days is outside the trial."""
        start = NOW.subtract(days=3)
        assert is_in_trial_period(start, NOW) is False
        assert get_remaining_trial_days(start, NOW) == 0

    def test_remaining_days_never_negative(self):
        """Long expired trials report zero days."""
        assert get_remaining_trial_days(NOW.subtract(days=30), NOW) == 0


class TestLimits:
    """Session limits per plan."""

    def test_premium_limits(self):
        """Premium users get the premium cap regardless of trial."""
        assert get_session_limits(True, False) == {
            "sessions_per_day": PREMIUM["sessions_per_day"],
            "plan_name": "Premium",
            "has_access": True,
        }

    def test_trial_limits(self):
        """Trial users get the trial cap."""
        limits = get_session_limits(False, True)
        assert limits["plan_name"] == "Trial"
        assert limits["sessions_per_day"] == 10
        assert limits["has_access"] is True

    def test_expired_limits(self):
        """Neither premium nor in trial means no access."""
        assert get_session_limits(False, False) == {
            "sessions_per_day": 0,
            "plan_name": "Expired",
            "has_access": False,
        }

    def test_has_reached_daily_limit(self):
        """The daily limit is reached at the cap, and always without access."""
        assert has_reached_daily_limit(9, False, True) is False
        assert has_reached_daily_limit(10, False, True) is True
        assert has_reached_daily_limit(0, True, False) is False
        assert has_reached_daily_limit(0, False, False) is True


class TestFormatPrice:
    """Price strings shown on the paywall."""

    def test_monthly(self):
        assert format_price("monthly") == {
            "main_price": "$19.99",
            "subtext": "Billed monthly",
            "badge": None,
        }

    def test_yearly(self):
        assert format_price("yearly") == {
            "main_price": "$8.33",
            "subtext": "$99.99 billed annually",
            "badge": "SAVE 58%",
        }
