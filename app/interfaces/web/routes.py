"""Route serving the single page client."""

from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["web"])

_INDEX_PATH = Path(__file__).resolve().parent / "static" / "index.html"


@lru_cache(maxsize=1)
def _load_index() -> str:
    return _INDEX_PATH.read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index() -> HTMLResponse:
    """Return the document portal page."""

    return HTMLResponse(_load_index())


__all__ = ["router"]
