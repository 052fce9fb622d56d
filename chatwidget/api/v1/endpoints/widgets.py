import logging
import os

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from chatwidget.core.errors import ConfigValidationError
from chatwidget.core.settings import DEFAULT_TIER
from chatwidget.core.tiers import Tier
from chatwidget.services.sanitizer import sanitize_config
from chatwidget.services.theme_builder import render_css
from chatwidget.services.validator import ensure_valid, validate_config
from chatwidget.services.workflow import ConfigWorkflow

# Setup Logging
logger = logging.getLogger("chatwidget.api")
router = APIRouter()

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "..", "templates")
templates = Jinja2Templates(directory=os.path.normpath(TEMPLATE_DIR))


def parse_tier(tier: str) -> Tier:
    try:
        return Tier.parse(tier)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def require_document(payload, name: str = "config") -> dict:
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail=f"'{name}' must be a JSON object")
    return payload


# The preview inlines CSS in an autoescaped <style>, so font stacks go in unquoted
FONT_VARIABLES = ("cw-font-family", "cw-font-family-mono")


def unquote_fonts(variables: dict) -> dict:
    cleaned = dict(variables)
    for name in FONT_VARIABLES:
        cleaned[name] = cleaned[name].replace("'", "").replace('"', "")
    return cleaned


# --- 1. SANITIZE ---
@router.post("/config/sanitize")
async def sanitize(payload: dict, tier: str = Query(DEFAULT_TIER)):
    """Repairs a raw document and checks the result against the validation gate."""
    tier = parse_tier(tier)
    sanitized = sanitize_config(payload, tier)
    try:
        ensure_valid(sanitized, tier)
    except ConfigValidationError as e:
        logger.warning(f"Sanitized config still invalid ({tier.value}): {e}")
        raise HTTPException(status_code=422, detail=e.to_dict())
    return {"config": sanitized}


# --- 2. VALIDATE ---
@router.post("/config/validate")
async def validate(payload: dict, tier: str = Query(DEFAULT_TIER)):
    """Validates a document as-is. Nothing is repaired."""
    tier = parse_tier(tier)
    issues = validate_config(payload, tier)
    if issues:
        raise HTTPException(status_code=422, detail=[i.model_dump(by_alias=True) for i in issues])
    return {"valid": True}


# --- 3. SAVE (merge + sanitize + validate + strip) ---
@router.post("/config/save")
async def save(payload: dict, tier: str = Query(DEFAULT_TIER)):
    tier = parse_tier(tier)
    existing = require_document(payload.get("existing") or {}, "existing")
    updates = require_document(payload.get("updates") or {}, "updates")

    try:
        document = ConfigWorkflow.process_save(existing, updates, tier)
    except ConfigValidationError as e:
        logger.warning(f"Save rejected ({tier.value}): {e}")
        raise HTTPException(status_code=422, detail=e.to_dict())
    return {"config": document}


# --- 4. RENDER (runtime config + theme variables) ---
@router.post("/config/render")
async def render(
    payload: dict,
    request: Request,
    widget_key: str = Query(None, alias="widgetKey"),
    tier: str = Query(None),
):
    """Builds what the embed script receives for a stored document."""
    if tier is not None:
        tier = parse_tier(tier)
    origin = str(request.base_url)
    runtime, variables, css = ConfigWorkflow.render(payload, origin=origin, widget_key=widget_key, tier=tier)
    return {"config": runtime.to_payload(), "variables": variables, "css": css}


# --- 5. PREVIEW PAGE ---
@router.post("/config/preview", response_class=HTMLResponse)
async def preview(payload: dict, request: Request, tier: str = Query(None)):
    """Renders a static preview of the themed widget shell."""
    if tier is not None:
        tier = parse_tier(tier)
    runtime, variables, _ = ConfigWorkflow.render(payload, origin=str(request.base_url), tier=tier)
    css = render_css(unquote_fonts(variables))
    return templates.TemplateResponse(
        request,
        "preview.html",
        {
            "config": runtime,
            "css": css,
            "variables": variables,
        },
    )
