# src/config.py
"""Bot configuration loaded with pydantic-settings.

Values come from the environment and an optional .env file. Only the
Slack and Notion credentials are needed to run; without a Gemini key the
bot works with the flag parser alone.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings for the task bot.

    Environment variables take precedence over .env values. Names are
    matched case-insensitively, e.g. NOTION_TOKEN -> notion_token.
    """

    # Slack (Socket Mode)
    slack_bot_token: str = ""
    slack_app_token: str = ""
    task_channel_id: str = ""  # empty: every channel the bot is in

    # Notion
    notion_token: str = ""
    notion_database_id: str = ""
    notion_api_version: str = "2022-06-28"

    # Gemini; either key name works
    google_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # "today" for year-less due dates
    timezone: str = "UTC"

    log_level: str = "INFO"
    log_format: str = "text"
    logfire_token: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def api_key(self) -> str:
        """Gemini key, preferring GOOGLE_API_KEY over GEMINI_API_KEY."""
        return self.google_api_key or self.gemini_api_key

    @property
    def model_enabled(self) -> bool:
        """Whether the language-model interpreter can be built."""
        return bool(self.api_key)
