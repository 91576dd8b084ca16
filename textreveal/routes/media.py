from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from ..storage import media_path

router = APIRouter(prefix="/media", tags=["media"])


@router.get("/{filename}")
def rendered_video(filename: str):
    try:
        p = media_path(filename)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"No render named {filename}")

    return FileResponse(str(p), media_type="video/mp4", filename=p.name)
