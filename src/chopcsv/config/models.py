"""Pydantic models describing chop-csv configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

LEGACY_ENCODING = "cp932"
UTF8_ENCODING = "utf-8"


class InputConfig(BaseModel):
    """How input files are found, decoded and parsed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    utf8: bool = False
    date_format: str = "%Y%m%d"
    extension: str = ".csv"
    fields_per_record: int = 0

    @field_validator("date_format")
    @classmethod
    def _non_empty_format(cls, value: str) -> str:
        if not value:
            raise ValueError("date_format must not be empty.")
        return value

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("extension must start with '.'.")
        return value

    @property
    def encoding(self) -> str:
        """Codec used to decode input bytes before CSV parsing."""

        return UTF8_ENCODING if self.utf8 else LEGACY_ENCODING

    @property
    def decode_errors(self) -> str:
        # utf-8 mode keeps undecodable bytes so they round-trip to the output.
        return "surrogateescape" if self.utf8 else "replace"


class OutputConfig(BaseModel):
    """Where and how partitions are written."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: Path = Path("chopped")
    compress_level: int = Field(default=9, ge=1, le=9)


class ChopConfig(BaseModel):
    """Root configuration object, built once per run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


__all__ = [
    "ChopConfig",
    "InputConfig",
    "LEGACY_ENCODING",
    "OutputConfig",
    "UTF8_ENCODING",
]
