"""Configuration for the command-line tool."""

from typing import List, Optional

from pydantic import BaseModel, Field


class CLIConfig(BaseModel):
    """CLI settings, resolved from arguments over ``PuidConfig``."""

    prefixes: List[str] = Field(description="Prefixes to generate ids for")
    entropy: Optional[int] = Field(
        default=None, description="Random suffix length (generator default if unset)"
    )
    count: int = Field(default=1, ge=1, description="Identifiers per prefix")
    bench: Optional[int] = Field(
        default=None, ge=1, description="Benchmark this many generations"
    )
