"""Tests for slack_archive.store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from slack_archive.config.settings import AppSettings
from slack_archive.ingest import MessageTable
from slack_archive.models import Channel, MonthKey
from slack_archive.source import DirSource, LogEntryNotFoundError
from slack_archive.store import ChannelNotFoundError, LogStore, filter_channels

THREAD_TS = "1706745600.000100"


@pytest.fixture
def store(export_dir: Path) -> LogStore:
    return LogStore(DirSource(export_dir))


# ---------------------------------------------------------------------------
# TestFilterChannels
# ---------------------------------------------------------------------------


class TestFilterChannels:
    """Tests for filter_channels function."""

    @pytest.fixture
    def channels(self) -> list[Channel]:
        return [
            Channel(id="C1", name="general"),
            Channel(id="C2", name="random"),
            Channel(id="C3", name="dev"),
        ]

    def test_wildcard_keeps_all(self, channels: list[Channel]) -> None:
        assert filter_channels(channels, ["*"]) == channels

    def test_keeps_named_channels_in_allow_list_order(self, channels: list[Channel]) -> None:
        result = filter_channels(channels, ["dev", "general"])

        assert [c.id for c in result] == ["C3", "C1"]

    def test_ignores_unknown_names(self, channels: list[Channel]) -> None:
        assert filter_channels(channels, ["nope"]) == []

    def test_first_channel_wins_on_duplicate_names(self) -> None:
        channels = [Channel(id="C1", name="dup"), Channel(id="C2", name="dup")]

        assert [c.id for c in filter_channels(channels, ["dup"])] == ["C1"]


# ---------------------------------------------------------------------------
# TestLogStoreTables
# ---------------------------------------------------------------------------


class TestLogStoreTables:
    """Tests for the channel, user and emoji tables of LogStore."""

    def test_channels_sorted_by_name(self, store: LogStore) -> None:
        assert [c.name for c in store.get_channels()] == ["dev", "general", "random"]

    def test_channel_allow_list(self, export_dir: Path) -> None:
        settings = AppSettings(channels=["random", "general"])

        store = LogStore(DirSource(export_dir), settings)

        assert [c.name for c in store.get_channels()] == ["general", "random"]
        assert set(store.mts) == {"C001", "C002"}

    def test_display_names(self, store: LogStore) -> None:
        assert store.get_display_name_by_user_id("U001") == "Alice Liddell"
        assert store.get_display_name_by_user_id("U002") == "bobby"
        assert store.get_display_name_by_user_id("U003") == ""
        assert store.get_display_name_by_user_id("UNKNOWN") == ""

    def test_bot_id_resolves_to_user(self, store: LogStore) -> None:
        user = store.get_user_by_id("B001")

        assert user is not None
        assert user.id == "U004"
        assert store.get_display_name_by_user_id("B001") == "Helper Bot"

    def test_get_user_by_id_unknown(self, store: LogStore) -> None:
        assert store.get_user_by_id("UNKNOWN") is None

    def test_display_name_map(self, store: LogStore) -> None:
        names = store.get_display_name_map()

        assert names["U001"] == "Alice Liddell"
        assert names["U003"] == ""
        assert names["B001"] == "Helper Bot"

    def test_emoji_map(self, store: LogStore) -> None:
        assert store.get_emoji_map() == {"party": "https://emoji.example.com/party.gif"}

    def test_missing_emoji_table_is_empty(self, export_dir: Path) -> None:
        (export_dir / "emoji.json").unlink()

        store = LogStore(DirSource(export_dir))

        assert store.et is None
        assert store.get_emoji_map() == {}

    def test_custom_emoji_path(self, export_dir: Path) -> None:
        (export_dir / "custom-emoji.json").write_text('{"wave": "https://e.example/w.png"}')

        store = LogStore(DirSource(export_dir), AppSettings(emoji_json="custom-emoji.json"))

        assert store.get_emoji_map() == {"wave": "https://e.example/w.png"}

    def test_tables_with_null_fields(self, export_dir: Path) -> None:
        (export_dir / "users.json").write_text(
            json.dumps(
                [{"id": "U1", "tz": None, "profile": {"real_name": None, "display_name": "x"}}]
            )
        )
        (export_dir / "channels.json").write_text(
            json.dumps([{"id": "C001", "name": "general", "topic": None, "members": None}])
        )

        store = LogStore(DirSource(export_dir))

        assert store.get_display_name_by_user_id("U1") == "x"
        assert [c.id for c in store.get_channels()] == ["C001"]

    def test_reaction_without_name_does_not_abort_channel(self, export_dir: Path) -> None:
        (export_dir / "C001" / "2024-03-01.json").write_text(
            json.dumps([{"ts": "1709251200.000100", "text": "hi", "reactions": [{"count": 1}]}])
        )
        store = LogStore(DirSource(export_dir))

        msgs = store.get_messages_per_month("C001")[MonthKey(2024, 3)]

        assert msgs[0].reactions[0].name == ""

    def test_missing_users_table_raises(self, export_dir: Path) -> None:
        (export_dir / "users.json").unlink()

        with pytest.raises(LogEntryNotFoundError):
            LogStore(DirSource(export_dir))


# ---------------------------------------------------------------------------
# TestGetMessagesPerMonth
# ---------------------------------------------------------------------------


class TestGetMessagesPerMonth:
    """Tests for lazy per-channel message loading."""

    def test_loads_month_buckets(self, any_source) -> None:
        store = LogStore(any_source)

        msgs_map = store.get_messages_per_month("C001")

        assert sorted(msgs_map) == [MonthKey(2024, 1), MonthKey(2024, 2)]
        assert [m.text for m in msgs_map[MonthKey(2024, 1)]] == [
            "happy new year",
            "anyone here?",
        ]
        # Replies stay out of the month view
        assert [m.text for m in msgs_map[MonthKey(2024, 2)]] == ["thread root"]

    def test_trail_flags(self, store: LogStore) -> None:
        jan = store.get_messages_per_month("C001")[MonthKey(2024, 1)]

        assert [m.trail for m in jan] == [False, True]

    def test_tables_empty_until_requested(self, store: LogStore) -> None:
        assert store.mts["C001"].msgs_map == {}

    def test_ingests_only_once(self, store: LogStore) -> None:
        with patch.object(
            MessageTable, "read_directory", autospec=True, side_effect=MessageTable.read_directory
        ) as mock_read:
            first = store.get_messages_per_month("C001")
            second = store.get_messages_per_month("C001")

        assert mock_read.call_count == 1
        assert first is second

    def test_unknown_channel_raises(self, store: LogStore) -> None:
        with pytest.raises(ChannelNotFoundError) as exc_info:
            store.get_messages_per_month("C999")

        assert "C999" in str(exc_info.value)

    def test_filtered_channel_raises(self, export_dir: Path) -> None:
        store = LogStore(DirSource(export_dir), AppSettings(channels=["random"]))

        with pytest.raises(ChannelNotFoundError):
            store.get_messages_per_month("C001")

    def test_missing_channel_directory_raises(self, store: LogStore) -> None:
        with pytest.raises(LogEntryNotFoundError):
            store.get_messages_per_month("C003")

    def test_channel_dir_by_name(self, tmp_path: Path, export_files: dict[str, bytes]) -> None:
        base = tmp_path / "raw"
        for name, content in export_files.items():
            if not name.startswith("C00"):
                path = base / name
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(content)
        (base / "general").mkdir()
        (base / "general" / "2024-05-01.json").write_text(
            json.dumps([{"type": "message", "text": "by name", "ts": "1714521600.000100"}])
        )

        store = LogStore(DirSource(base), AppSettings(channel_dir="name"))
        msgs_map = store.get_messages_per_month("C001")

        assert store.channel_dir(store.ct.channel_map["C001"]) == "general"
        assert [m.text for m in msgs_map[MonthKey(2024, 5)]] == ["by name"]


# ---------------------------------------------------------------------------
# TestNavigation
# ---------------------------------------------------------------------------


class TestNavigation:
    """Tests for month navigation and thread lookup."""

    def test_has_next_and_prev_month(self, store: LogStore) -> None:
        store.get_messages_per_month("C001")

        assert store.has_next_month("C001", MonthKey(2024, 1))
        assert not store.has_next_month("C001", MonthKey(2024, 2))
        assert store.has_prev_month("C001", MonthKey(2024, 2))
        assert not store.has_prev_month("C001", MonthKey(2024, 1))

    def test_navigation_before_loading_is_false(self, store: LogStore) -> None:
        assert not store.has_next_month("C001", MonthKey(2024, 1))

    def test_navigation_unknown_channel_is_false(self, store: LogStore) -> None:
        assert not store.has_next_month("C999", MonthKey(2024, 1))
        assert not store.has_prev_month("C999", MonthKey(2024, 2))

    def test_get_thread(self, store: LogStore) -> None:
        store.get_messages_per_month("C001")

        thread = store.get_thread("C001", THREAD_TS)

        assert thread is not None
        assert thread.root is not None
        assert thread.root.text == "thread root"
        assert [m.text for m in thread.replies] == ["reply"]
        assert thread.num_replies == 1

    def test_get_thread_unknown(self, store: LogStore) -> None:
        store.get_messages_per_month("C001")

        assert store.get_thread("C001", "0000000000.000000") is None
        assert store.get_thread("C999", THREAD_TS) is None


# ---------------------------------------------------------------------------
# TestLogStoreOpen
# ---------------------------------------------------------------------------


class TestLogStoreOpen:
    """Tests for LogStore.open over each packaging of an export."""

    def test_open_directory(self, export_dir: Path) -> None:
        store = LogStore.open(export_dir)

        assert len(store.get_channels()) == 3

    def test_open_zip_detects_root(self, export_zip: Path) -> None:
        store = LogStore.open(export_zip)

        assert store.src.prefix == "slack-export"
        assert MonthKey(2024, 3) in store.get_messages_per_month("C002")

    @pytest.mark.parametrize("mode", ["w", "w:gz", "w:bz2"])
    def test_open_tar_detects_root(self, make_tar: Callable[[str], Path], mode: str) -> None:
        store = LogStore.open(make_tar(mode))

        assert store.get_display_name_by_user_id("U001") == "Alice Liddell"
        assert MonthKey(2024, 2) in store.get_messages_per_month("C001")
