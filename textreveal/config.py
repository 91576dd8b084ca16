from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repo root: the directory holding pyproject.toml
ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = ROOT / ".env"


def _resolve_under_root(p: str) -> str:
    """Resolve ASSETS_DIR-like paths relative to repo root unless already absolute."""
    if not p:
        return str((ROOT / "_assets").resolve())
    path = Path(p)
    if path.is_absolute():
        return str(path)
    return str((ROOT / path).resolve())


class Settings(BaseSettings):
    redis_url: str = "redis://localhost:6379/0"

    # always absolute so renders land in the same place no matter where we're launched from
    assets_dir: str = str((ROOT / "_assets").resolve())

    # Monospace TrueType face; bare names are looked up on the system font path
    font_path: str = "DejaVuSansMono.ttf"

    # Playback defaults, used when a request carries no (or an invalid) value
    default_resolution: int = 720
    default_alignment: str = "left"
    default_effect: str = "typewriter"

    fps: int = 30
    ffmpeg_bin: str = "ffmpeg"

    log_level: str = "INFO"
    log_file: str = ""

    model_config = SettingsConfigDict(env_file=str(ENV_PATH), env_prefix="TEXTREVEAL_", extra="ignore")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.assets_dir = _resolve_under_root(self.assets_dir)


settings = Settings()
