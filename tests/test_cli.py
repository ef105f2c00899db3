"""Tests for the command line interface, run against a local-only context."""

from pathlib import Path

import pytest
from typer.testing import CliRunner
from yaml import dump, safe_load

from conftest import FrozenClock
from unbind.configuration import Configuration
from unbind.context import AppContext, build_context
from unbind.repository.configuration import ConfigurationRepository
from unbind.terminal.app import app

USER_ID = "local-user"

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path: Path, config: Configuration) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(dump(dict(config)))
    return path


@pytest.fixture
def context(
    tmp_path: Path, config: Configuration, config_path: Path, clock: FrozenClock
) -> AppContext:
    config["user_id"] = USER_ID
    app_context = build_context(
        config, ConfigurationRepository(config_path), tmp_path / "data", clock
    )
    assert app_context.local_profiles is not None
    app_context.local_profiles.start_trial(USER_ID)
    return app_context


def invoke(context: AppContext, *args: str):
    return runner.invoke(app, ["--no-header", *args], obj=context)


class TestEntryCommands:
    def test_add_and_list(self, context: AppContext):
        """Entries written by hand are listed."""
        result = invoke(
            context,
            "entry",
            "add",
            "--summary",
            "Plan the week",
            "--mood",
            "focused",
            "--task",
            "Draft agenda:10",
            "--task",
            "Stretch",
        )
        assert result.exit_code == 0, result.output

        entries = context.entries.get_entries()
        assert len(entries) == 1
        assert entries[0]["summary"] == "Plan the week"
        assert [(task["title"], task["duration"]) for task in entries[0]["tasks"]] == [
            ("Draft agenda", 10),
            ("Stretch", 0),
        ]

        listed = invoke(context, "e", "l")
        assert listed.exit_code == 0, listed.output
        assert "focused" in listed.output

    def test_show_by_id_prefix(self, context: AppContext):
        """Entries can be addressed by a unique id prefix."""
        saved = context.entries.save_entry(
            {
                "audio_uri": None,
                "transcript": None,
                "summary": "Short one",
                "blocker": None,
                "mood": "calm",
                "tasks": [],
            }
        )

        result = invoke(context, "entry", "show", saved["id"][:6])

        assert result.exit_code == 0, result.output
        assert "calm" in result.output

    def test_unknown_id_is_rejected(self, context: AppContext):
        result = invoke(context, "entry", "show", "does-not-exist")
        assert result.exit_code == 2

    def test_favorite_and_delete(self, context: AppContext):
        saved = context.entries.save_entry(
            {
                "audio_uri": None,
                "transcript": None,
                "summary": None,
                "blocker": None,
                "mood": None,
                "tasks": [],
            }
        )

        assert invoke(context, "entry", "favorite", saved["id"]).exit_code == 0
        assert context.entries.get_favorite_count() == 1

        assert invoke(context, "entry", "delete", saved["id"]).exit_code == 0
        assert context.entries.get_entry_count() == 0

    def test_clear(self, context: AppContext):
        invoke(context, "entry", "add", "--summary", "one")
        invoke(context, "entry", "add", "--summary", "two")

        result = invoke(context, "entry", "clear", "--yes")

        assert result.exit_code == 0, result.output
        assert context.entries.get_entry_count() == 0


class TestTaskCommands:
    def test_toggle_add_modify_remove(self, context: AppContext):
        """Tasks are managed through their entry."""
        invoke(context, "entry", "add", "--task", "Reply to Sam:5")
        entry = context.entries.get_entries()[0]
        task_id = entry["tasks"][0]["id"]

        toggled = invoke(context, "task", "toggle", entry["id"][:8], task_id[:8])
        assert toggled.exit_code == 0, toggled.output
        assert context.entries.get_entries()[0]["tasks"][0]["completed"] is True

        added = invoke(context, "t", "a", entry["id"], "Book flights", "--duration", "20")
        assert added.exit_code == 0, added.output
        tasks = context.entries.get_entries()[0]["tasks"]
        assert tasks[1]["title"] == "Book flights"
        assert tasks[1]["duration"] == 20

        modified = invoke(context, "task", "modify", entry["id"], tasks[1]["id"], "--title", "Book trains")
        assert modified.exit_code == 0, modified.output
        assert context.entries.get_entries()[0]["tasks"][1]["title"] == "Book trains"

        removed = invoke(context, "task", "remove", entry["id"], tasks[1]["id"])
        assert removed.exit_code == 0, removed.output
        assert len(context.entries.get_entries()[0]["tasks"]) == 1

    def test_pending(self, context: AppContext):
        invoke(context, "entry", "add", "--task", "Water plants:2")

        result = invoke(context, "task", "pending")

        assert result.exit_code == 0, result.output
        assert "Water plants" in result.output


class TestOtherCommands:
    def test_stats(self, context: AppContext):
        invoke(context, "entry", "add", "--summary", "today")

        result = invoke(context, "stats")

        assert result.exit_code == 0, result.output
        assert "1 day" in result.output

    def test_achievements(self, context: AppContext, clock: FrozenClock):
        """Achievements earned outside a recording are unlocked when listed."""
        context.user_stats.increment_session_count()
        invoke(context, "entry", "add", "--summary", "day one")
        clock.advance(days=1)
        invoke(context, "entry", "add", "--summary", "day two")
        clock.advance(days=1)
        invoke(context, "entry", "add", "--summary", "day three")

        result = invoke(context, "ac")

        assert result.exit_code == 0, result.output
        assert "First Flame" in result.output
        assert "Getting Started" in result.output
        assert context.achievements.get_progress()["unlocked_achievements"] == [
            "first_session",
            "streak_3",
        ]

    def test_access_status_and_premium(self, context: AppContext):
        status = invoke(context, "access", "status")
        assert status.exit_code == 0, status.output
        assert "Trial" in status.output

        premium = invoke(context, "access", "premium", "--on")
        assert premium.exit_code == 0, premium.output
        profile = context.profiles.get_profile(USER_ID)
        assert profile is not None
        assert profile["is_premium"] is True

    def test_record_without_backend(self, context: AppContext, tmp_path: Path):
        """Recording reports a configuration error when no backend is set."""
        audio = tmp_path / "recording.m4a"
        audio.write_bytes(b"audio")

        result = invoke(context, "record", str(audio))

        assert result.exit_code == 1
        assert context.entries.get_entry_count() == 0

    def test_weekly_summary_history(self, context: AppContext):
        invoke(context, "entry", "add", "--summary", "today")

        weekly = invoke(context, "summary", "weekly", "--save", "--mark-shown")
        assert weekly.exit_code == 0, weekly.output
        assert context.weekly_summaries.get_last_shown() == context.clock()

        history = invoke(context, "su", "h")
        assert history.exit_code == 0, history.output
        assert len(context.weekly_summaries.get_summaries()) == 1

    def test_config_set(self, context: AppContext, config_path: Path):
        result = invoke(context, "config", "set", "--language", "de", "--log-level", "info")

        assert result.exit_code == 0, result.output
        stored = safe_load(config_path.read_text())
        assert stored["language"] == "de"
        assert stored["log_level"] == "INFO"
