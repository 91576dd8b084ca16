from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from celery import Celery

from .animation.pipeline import render_text_to_mp4
from .config import settings
from .schemas import AnimateReq
from .storage import render_output_path

logger = logging.getLogger(__name__)

celery_app = Celery(
    "textreveal",
    broker=settings.redis_url,
    backend=settings.redis_url,
)


@celery_app.task(name="render_animation")
def render_animation(
    text: str,
    resolution: Optional[Any] = None,
    alignment: Optional[str] = None,
    effect: Optional[str] = None,
) -> Dict[str, Any]:
    """Background variant of POST /animate."""
    req = AnimateReq(text=text, resolution=resolution, alignment=alignment, effect=effect)
    config = req.playback_config()
    out_mp4 = render_output_path(config.resolution_px)

    try:
        result = render_text_to_mp4(req.text, out_mp4, config=config)
    except Exception as e:
        logger.exception("Render job failed")
        return {"ok": False, "error": str(e)}

    return {
        "ok": True,
        "mp4_path": result.output_path,
        "paragraphs": result.paragraphs,
        "duration_ms": result.duration_ms,
        "frames": result.frames,
    }
