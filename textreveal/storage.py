import uuid
from pathlib import Path
from .config import settings

PROJECT_ROOT = Path(__file__).resolve().parents[1]

def assets_root() -> Path:
    p = Path(settings.assets_dir)
    return p if p.is_absolute() else (PROJECT_ROOT / p).resolve()

def renders_dir() -> Path:
    p = assets_root() / "renders"
    p.mkdir(parents=True, exist_ok=True)
    return p

def render_output_path(resolution_px: int) -> str:
    # same stem the browser download used, plus a short id so renders don't clobber each other
    name = f"text-animation-{resolution_px}p-{uuid.uuid4().hex[:8]}.mp4"
    return str(renders_dir() / name)

def media_path(filename: str) -> Path:
    """Resolve a rendered file by name; raises FileNotFoundError for anything outside the renders dir."""
    base = renders_dir().resolve()
    p = (base / filename).resolve()
    if p.parent != base or not p.is_file():
        raise FileNotFoundError(filename)
    return p
