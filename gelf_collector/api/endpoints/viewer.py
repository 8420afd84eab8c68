"""Browser log viewer."""

from __future__ import annotations

from functools import lru_cache
from importlib.resources import files

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()


@lru_cache
def load_viewer_page() -> str:
    return (files("gelf_collector") / "web" / "index.html").read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def viewer() -> HTMLResponse:
    return HTMLResponse(load_viewer_page())
