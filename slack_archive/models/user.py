"""User records from users.json."""

from __future__ import annotations

from slack_archive.models.base import ExportModel


class UserProfile(ExportModel):
    title: str = ""
    real_name: str = ""
    real_name_normalized: str = ""
    display_name: str = ""
    display_name_normalized: str = ""
    status_text: str = ""
    status_emoji: str = ""
    avatar_hash: str = ""
    first_name: str = ""
    last_name: str = ""
    image_24: str = ""
    image_32: str = ""
    image_48: str = ""
    image_72: str = ""
    image_192: str = ""
    image_512: str = ""
    team: str = ""
    bot_id: str = ""


class User(ExportModel):
    id: str = ""
    team_id: str = ""
    name: str = ""
    deleted: bool = False
    color: str = ""
    real_name: str = ""
    tz: str = ""
    tz_label: str = ""
    tz_offset: int = 0
    profile: UserProfile = UserProfile()
    is_admin: bool = False
    is_owner: bool = False
    is_primary_owner: bool = False
    is_restricted: bool = False
    is_ultra_restricted: bool = False
    is_bot: bool = False
    is_app_user: bool = False
    updated: int = 0

    @property
    def display_name(self) -> str:
        """Real name, else display name, else ""."""
        return self.profile.real_name or self.profile.display_name
