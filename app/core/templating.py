"""Jinja2 template environment shared by every HTML endpoint."""

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.core.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["project_name"] = settings.PROJECT_NAME


def render(request: Request, template_name: str, ctx: dict | None = None, status_code: int = 200):
    """TemplateResponse wrapper so call sites stay one line."""
    return templates.TemplateResponse(request, template_name, ctx or {}, status_code=status_code)
