from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException

from ..animation.encode import CaptureUnavailable
from ..animation.pipeline import render_text_to_mp4
from ..schemas import AnimateOut, AnimateReq, JobOut
from ..storage import render_output_path
from ..tasks import celery_app, render_animation

router = APIRouter(prefix="/animate", tags=["animate"])


@router.post("", response_model=AnimateOut)
def animate(req: AnimateReq):
    """Render the text to an MP4 right away and return where it landed."""
    if not (req.text or "").strip():
        raise HTTPException(status_code=400, detail="Text is empty")

    config = req.playback_config()
    out_mp4 = render_output_path(config.resolution_px)
    try:
        result = render_text_to_mp4(req.text, out_mp4, config=config)
    except CaptureUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Video encoding unavailable: {e}")

    return AnimateOut(
        mp4_path=result.output_path,
        filename=Path(result.output_path).name,
        paragraphs=result.paragraphs,
        duration_ms=result.duration_ms,
        frames=result.frames,
    )


@router.post("/jobs", response_model=JobOut)
def enqueue(req: AnimateReq):
    if not (req.text or "").strip():
        raise HTTPException(status_code=400, detail="Text is empty")

    task = render_animation.delay(req.text, req.resolution, req.alignment, req.effect)
    return JobOut(task_id=task.id, status=task.status)


@router.get("/jobs/{task_id}", response_model=JobOut)
def job_status(task_id: str):
    res = celery_app.AsyncResult(task_id)
    result = res.result if res.successful() else None
    return JobOut(task_id=task_id, status=res.status, result=result)
