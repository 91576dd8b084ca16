from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .logging_utils import setup_logging
from .routes.animate import router as animate_router
from .routes.media import router as media_router

setup_logging(level=settings.log_level, log_file=settings.log_file or None, logger_name="textreveal")

app = FastAPI(title="Text Reveal")

# Dev CORS: allow any localhost/127.0.0.1 origin on any port
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(animate_router)
app.include_router(media_router)


@app.get("/")
def health():
    return {"ok": True, "service": "textreveal"}
