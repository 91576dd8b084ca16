import logging
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from .animation.plan import Alignment, EffectName
from .config import settings

logger = logging.getLogger(__name__)

MIN_RESOLUTION = 64
MAX_RESOLUTION = 4096


class PlaybackConfig(BaseModel):
    """Resolution/alignment/effect selection for one playback.

    Anything unrecognised falls back to the configured default instead of
    failing, the same way an unselected control keeps its initial value.
    """

    resolution_px: int = settings.default_resolution
    alignment: Alignment = Alignment(settings.default_alignment)
    effect: EffectName = EffectName(settings.default_effect)

    @field_validator("resolution_px", mode="before")
    @classmethod
    def _coerce_resolution(cls, v: Any) -> int:
        try:
            value = int(v)
        except (TypeError, ValueError):
            logger.debug("Invalid resolution %r, using default", v)
            return settings.default_resolution
        if not MIN_RESOLUTION <= value <= MAX_RESOLUTION:
            logger.debug("Resolution %r out of range, using default", v)
            return settings.default_resolution
        return value

    @field_validator("alignment", mode="before")
    @classmethod
    def _coerce_alignment(cls, v: Any) -> Alignment:
        try:
            return Alignment(str(v).strip().lower())
        except ValueError:
            logger.debug("Invalid alignment %r, using default", v)
            return Alignment(settings.default_alignment)

    @field_validator("effect", mode="before")
    @classmethod
    def _coerce_effect(cls, v: Any) -> EffectName:
        try:
            return EffectName(str(v).strip().lower())
        except ValueError:
            logger.debug("Invalid effect %r, using default", v)
            return EffectName(settings.default_effect)


class AnimateReq(BaseModel):
    text: str
    resolution: Optional[Any] = None
    alignment: Optional[str] = None
    effect: Optional[str] = None

    def playback_config(self) -> PlaybackConfig:
        values = {
            "resolution_px": self.resolution,
            "alignment": self.alignment,
            "effect": self.effect,
        }
        return PlaybackConfig(**{k: v for k, v in values.items() if v is not None})


class AnimateOut(BaseModel):
    mp4_path: str
    filename: str
    paragraphs: int
    duration_ms: float
    frames: int


class JobOut(BaseModel):
    task_id: str
    status: str
    result: Optional[dict] = None
