"""Runtime configuration.

All settings can be overridden via environment variables with the prefix
'SIMPLEDFE_' or a local `.env` file. Example: SIMPLEDFE_OUTPUT_DIR=/tmp/reports
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from simpledfe_reports.models.enums import ReportKind


class Settings(BaseSettings):
    """Report service settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="SIMPLEDFE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Report generation
    output_dir: Path = Field(
        default=Path("temp"),
        description="Directory where generated report PDFs are written",
    )
    default_kind: ReportKind = Field(
        default=ReportKind.NFE,
        description="Report variant used when none is given",
    )
    repeat_header_on_break: bool = Field(
        default=False,
        description="Repeat the table header when a company table continues on a new page",
    )

    # HTTP service
    run_inline_worker: bool = Field(
        default=True,
        description="Run the report job worker inside the API process",
    )
    host: str = Field(default="127.0.0.1", description="API bind host")
    port: int = Field(default=8000, description="API bind port")


def get_settings() -> Settings:
    """Factory function to get settings instance."""

    return Settings()
