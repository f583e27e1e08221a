"""Environment-driven defaults for the module-level logger."""
import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ['LogSettings', 'settings']


class LogSettings(BaseSettings):
    """Settings read from ``REPLAYLOG_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='REPLAYLOG_',
        extra='ignore',
    )

    verbose: bool = Field(default=False, description='Start in verbose mode')
    debug: bool = Field(default=False, description='Start in debug mode')
    color: bool = Field(default=False, description='Start in color mode')
    buffer: bool = Field(default=False, description='Start with the replay buffer enabled')
    interactive: bool = Field(
        default=False,
        description='Drop timestamps and color prefixes (terminal sessions)',
    )
    no_color: bool = Field(
        default=False,
        description='Never emit ANSI sequences, whatever the color mode says',
    )

    @model_validator(mode='after')
    def honor_no_color_convention(self) -> 'LogSettings':
        """NO_COLOR (any value) and TERM=dumb switch color off."""
        if 'NO_COLOR' in os.environ or os.getenv('TERM') == 'dumb':
            self.no_color = True
        return self


settings = LogSettings()
