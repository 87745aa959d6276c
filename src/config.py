"""
Application configuration management.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return Path(env_dir)
    if Path("./src/data/processed").exists():
        return Path("./src/data")
    return Path("./data")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))

    # Cache settings
    cache_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "3600")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json: bool = field(default_factory=lambda: os.getenv("LOG_JSON", "0").lower() in ("1", "true", "yes"))

    # Thresholds
    coverage_threshold: int = field(default_factory=lambda: int(os.getenv("COVERAGE_THRESHOLD", "20")))  # staff per supervisor

    # Localised fallbacks
    unspecified_location: str = field(
        default_factory=lambda: os.getenv("UNSPECIFIED_LOCATION_LABEL", "غير محدد")
    )
    unknown_name: str = field(default_factory=lambda: os.getenv("UNKNOWN_NAME_LABEL", ""))

    # Role classification
    marker_locales: List[str] = field(
        default_factory=lambda: _env_list("SUPERVISOR_MARKER_LOCALES", "en,ar")
    )

    @property
    def processed_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def is_prod(self) -> bool:
        return self.app_env.lower() == "prod"

    @property
    def json_logs(self) -> bool:
        """Production always logs JSON; elsewhere LOG_JSON decides."""
        return self.log_json or self.is_prod


# Global config instance
config = AppConfig()


# Table file names
TABLE_FILES = {
    "roster": "roster",
    "region_summary": "region_summary",
}

# Workbook headers -> canonical roster columns
COLUMN_ALIASES = {
    "ID#": "civil_id",
    "EMP#": "employee_number",
    "NAME (AR)": "name_local",
    "NAME (ENG)": "name_latin",
    "POSITION": "position",
    "COMPANY": "company",
    "LOCATION": "location",
    "SourceSheet": "source_region",
}

# Identity columns are read as text from CSV so leading zeros survive
IDENTITY_DTYPES = {
    column: str
    for column in ("civil_id", "employee_number", "ID#", "EMP#")
}

# Required columns (hard fail if missing)
REQUIRED_COLUMNS = {
    "roster": [
        "civil_id",
        "name_local",
        "name_latin",
        "position",
        "source_region",
    ],
    "region_summary": [
        "name",
        "total_count",
    ],
}

# Optional columns (soft warn if missing)
OPTIONAL_COLUMNS = {
    "roster": [
        "employee_number",
        "company",
        "location",
    ],
}

# Supervisory role markers, matched case-insensitively as substrings.
# Heuristic only: "team lead-in cable" is classified as supervisory.
SUPERVISOR_MARKERS = {
    "en": ["supervisor", "lead", "manager", "foreman"],
    "ar": ["مشرف", "رئيس", "مدير"],
}

# Formatting constants
FORMAT_COUNT = "{:,}"
FORMAT_RATIO = "1 : {:,}"
