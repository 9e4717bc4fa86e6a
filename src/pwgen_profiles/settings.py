"""Runtime settings for pwgen-profiles."""

from pathlib import Path
import os

from pydantic import BaseModel, Field

from pwgen_profiles.engine.preview_runner import DEFAULT_PREVIEW_COUNT

STORE_ENV_VAR = "PWGEN_PROFILES_STORE"
DEFAULT_STORE_PATH = Path("~/.config/pwgen-profiles/profiles.yaml")


class Settings(BaseModel):
    """Where the profile store lives and how large previews are."""

    store_path: Path = Field(
        default=DEFAULT_STORE_PATH,
        description="YAML file holding the profile store"
    )
    preview_count: int = Field(
        default=DEFAULT_PREVIEW_COUNT,
        ge=1,
        description="Number of passwords in a preview batch"
    )

    @classmethod
    def from_env(cls, store_path: str | Path | None = None) -> "Settings":
        """Build settings, taking the store path from the argument or environment.

        Args:
            store_path: Explicit store path; overrides the environment

        Returns:
            Settings with the store path expanded
        """
        path = store_path or os.environ.get(STORE_ENV_VAR) or DEFAULT_STORE_PATH
        return cls(store_path=Path(path).expanduser())
