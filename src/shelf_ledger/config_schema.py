from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shelf_ledger.core.constants import (
    DEFAULT_GRID_COLUMNS,
    DEFAULT_MAX_LEVEL,
    DEFAULT_MAX_POSITION,
    DuplicateLocationPolicy,
)
from shelf_ledger.domain.location import GridBounds


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="shelf-ledger")
    env: Literal["dev", "prod", "local"] = Field(default="local")


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    json_output: bool = Field(default=True)


class GridConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: str = Field(default=DEFAULT_GRID_COLUMNS, min_length=1)
    max_position: int = Field(default=DEFAULT_MAX_POSITION, ge=1)
    max_level: int = Field(default=DEFAULT_MAX_LEVEL, ge=1)

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: str) -> str:
        v_upper = v.upper()
        if not v_upper.isalpha() or len(set(v_upper)) != len(v_upper):
            raise ValueError("columns must be distinct letters, e.g. 'ABCDEFGHIJK'")
        return v_upper

    def bounds(self) -> GridBounds:
        return GridBounds(
            columns=self.columns,
            max_position=self.max_position,
            max_level=self.max_level,
        )


class ImportsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    duplicate_location_policy: DuplicateLocationPolicy = Field(
        default=DuplicateLocationPolicy.LAST_WINS
    )


class StoreConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    seed_on_startup: bool = Field(default=True)


class Settings(BaseModel):
    """
    Root config schema.
    Matches the YAML structure in config/*.yaml
    """

    model_config = ConfigDict(extra="forbid")

    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    imports: ImportsConfig = Field(default_factory=ImportsConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
