from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class GeneratorConfig(BaseModel):
    """Identifier generator settings."""

    default_entropy: int = Field(
        default=12,
        ge=0,
        description="Random characters appended when the caller gives no length",
    )
    max_entropy: int = Field(
        default=255, ge=0, description="Largest accepted random suffix length"
    )
    max_prefix_length: int = Field(
        default=8, ge=1, description="Longest accepted prefix"
    )

    @model_validator(mode="after")
    def _check_default_within_max(self) -> GeneratorConfig:
        if self.default_entropy > self.max_entropy:
            raise ValueError(
                f"default_entropy ({self.default_entropy}) exceeds "
                f"max_entropy ({self.max_entropy})"
            )
        return self


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=False, description="Emit JSON lines instead of plain text"
    )
