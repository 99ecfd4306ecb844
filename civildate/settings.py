from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

CANONICAL_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Settings:
    """Adapter defaults.

    - storage_format: pattern used by the SQLAlchemy column type.
    - output_format: pattern used by the normalizer when none is passed.
    - default_locale: locale used by the localized parser when none is passed.
    """

    storage_format: str = CANONICAL_FORMAT
    output_format: str = CANONICAL_FORMAT
    default_locale: str = "en_US"

    @classmethod
    def from_env(cls, *, dotenv: bool = True, dotenv_path: Path | str | None = None) -> "Settings":
        """Read CIVILDATE_* variables, loading a .env file first (found from the cwd by default)."""
        if dotenv:
            load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        storage = os.environ.get("CIVILDATE_STORAGE_FORMAT", "").strip()
        output = os.environ.get("CIVILDATE_OUTPUT_FORMAT", "").strip()
        locale = os.environ.get("CIVILDATE_DEFAULT_LOCALE", "").strip()
        return cls(
            storage_format=storage or CANONICAL_FORMAT,
            output_format=output or CANONICAL_FORMAT,
            default_locale=locale or "en_US",
        )
