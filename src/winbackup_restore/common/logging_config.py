"""The [logging] configuration section."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from .config_utils import expand_path_variables


class LoggingConfig(BaseModel):
    """How a restore run reports progress and problems."""

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console format; the log file is always JSON"
    )
    file: Optional[str] = Field(
        default=None,
        description="Rotating log file, may use ${USER_LOGS} and friends"
    )

    @field_validator('level', 'format', mode='before')
    @classmethod
    def normalize_case(cls, v, info):
        """Accept level and format in any case."""
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == 'level' else v.lower()

    @field_validator('file', mode='after')
    @classmethod
    def expand_file(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return expand_path_variables(v)

    @property
    def log_file_path(self) -> Optional[Path]:
        return Path(self.file) if self.file else None
