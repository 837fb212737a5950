"""Configuration schema for backup extractor."""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator
from winbackup_restore.common import LoggingConfig, expand_path_variables


class RestoreSettings(BaseModel):
    """Configuration for restoring a backup."""

    model_config = ConfigDict(extra='forbid')

    source_dir: Optional[str] = Field(
        default=None,
        description="Backup folder containing the archives"
    )
    dest_dir: Optional[str] = Field(
        default=None,
        description="Directory the restored files are written to"
    )
    assume_yes: bool = Field(
        default=False,
        description="Start extraction without asking for confirmation"
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Look for archives inside symlinked directories too"
    )
    max_error_display: int = Field(
        default=20,
        ge=0,
        description="Maximum number of error details printed after extraction"
    )

    @field_validator('source_dir', 'dest_dir', mode='after')
    @classmethod
    def expand_variables(cls, v: Optional[str]) -> Optional[str]:
        """Expand ${USER_HOME} and friends in directory settings."""
        if v is None:
            return v
        return expand_path_variables(v)


class WinBackupRestoreConfig(BaseModel):
    """Root configuration for backup restore."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    restore: RestoreSettings = Field(default_factory=RestoreSettings)
