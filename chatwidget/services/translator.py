"""
Stored widget document -> RuntimeConfig.

Stored documents mix the flat playground fields (themeMode, accentColor,
tintHue, ...) with the older nested blocks (branding, style, connection,
features, legacy theme). Each runtime field has one resolver below that
applies the same precedence: flat field, then nested field, then default.
"""

import logging
from typing import Any, Dict, List, Optional

from chatwidget.core.rules import MISSING, is_number, lookup
from chatwidget.core.settings import DEFAULT_TIER, relay_endpoint
from chatwidget.core.tiers import Tier
from chatwidget.models.runtime import (
    AccentColor,
    AttachmentsBlock,
    BrandingBlock,
    ColorBlock,
    ColorScheme,
    ColorTriple,
    ComposerBlock,
    ConnectionBlock,
    FeaturesBlock,
    FontSource,
    LicenseBlock,
    RuntimeConfig,
    StartScreenBlock,
    StarterPrompt,
    StyleBlock,
    SurfaceColor,
    ThemeBlock,
    TypographyBlock,
    UserMessageColor,
)

logger = logging.getLogger("chatwidget.translator")

DEFAULT_PRIMARY_COLOR = "#0066FF"
DEFAULT_BACKGROUND = {ColorScheme.LIGHT: "#ffffff", ColorScheme.DARK: "#1a1a1a"}
DEFAULT_SURFACE_FOREGROUND = {ColorScheme.LIGHT: "#f8fafc", ColorScheme.DARK: "#2a2a2a"}
DEFAULT_TEXT = {ColorScheme.LIGHT: "#111827", ColorScheme.DARK: "#e5e5e5"}
DEFAULT_FONT_FAMILY = "system-ui, sans-serif"
DEFAULT_FONT_SIZE = 14
DEFAULT_CORNER_RADIUS = 12
CORNER_RADIUS_BY_PRESET = {"none": 0, "small": 6, "medium": 12, "large": 18, "pill": 24}
DEFAULT_POSITION = "bottom-right"

DEFAULT_GRAY_HUE = 220
DEFAULT_GRAY_TINT = 10
DEFAULT_GRAY_SHADE = 0

TYPOGRAPHY_FONT_FAMILY = "system-ui"
TYPOGRAPHY_BASE_SIZE = 16
CUSTOM_FONT_FAMILY = "Custom"

DEFAULT_PLACEHOLDER = "Type your message..."
DEFAULT_ATTACHMENT_SIZE = 5 * 1024 * 1024
DEFAULT_ATTACHMENT_COUNT = 5
DEFAULT_EXTENSIONS = ["pdf", "doc", "docx", "txt", "png", "jpg", "jpeg"]
DEFAULT_MAX_FILE_SIZE_KB = 5120

DEFAULT_COMPANY_NAME = "Chat Assistant"
DEFAULT_WELCOME_TEXT = "How can I help you today?"


# --- Value helpers ---
def _text(value: Any) -> Optional[str]:
    """Non-empty string or None."""
    return value if isinstance(value, str) and value else None


def _number(value: Any):
    return value if is_number(value) else None


def _nested(config: Dict[str, Any], path: str):
    value = lookup(config, path)
    return None if value is MISSING else value


def _first_text(*values) -> Optional[str]:
    for value in values:
        if _text(value) is not None:
            return value
    return None


def _first_number(*values):
    for value in values:
        if _number(value) is not None:
            return value
    return None


def _strings(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list) or not value:
        return None
    return [item for item in value if isinstance(item, str)]


def _accent_enabled(config: Dict[str, Any]) -> bool:
    # Playground documents set accentColor without the useAccent switch
    return config.get("useAccent", True) is not False and _text(config.get("accentColor")) is not None


# --- 1. Style resolvers ---
def resolve_color_scheme(config: Dict[str, Any]) -> str:
    mode = _first_text(config.get("themeMode"), _nested(config, "style.theme"), _nested(config, "theme.mode"))
    return ColorScheme.DARK if mode == ColorScheme.DARK else ColorScheme.LIGHT


def resolve_primary_color(config: Dict[str, Any]) -> str:
    if _accent_enabled(config):
        return config["accentColor"]
    return _first_text(_nested(config, "style.primaryColor")) or DEFAULT_PRIMARY_COLOR


def resolve_background_color(config: Dict[str, Any], scheme: str) -> str:
    if config.get("useCustomSurfaceColors") and _text(config.get("surfaceBackgroundColor")):
        return config["surfaceBackgroundColor"]
    return _first_text(_nested(config, "style.backgroundColor")) or DEFAULT_BACKGROUND[scheme]


def resolve_text_color(config: Dict[str, Any], scheme: str) -> str:
    if config.get("useCustomTextColor") and _text(config.get("customTextColor")):
        return config["customTextColor"]
    return _first_text(_nested(config, "style.textColor")) or DEFAULT_TEXT[scheme]


def resolve_radius(config: Dict[str, Any]) -> str:
    return _text(config.get("radius")) or "medium"


def resolve_corner_radius(config: Dict[str, Any]):
    radius = _text(config.get("radius"))
    if radius in CORNER_RADIUS_BY_PRESET:
        return CORNER_RADIUS_BY_PRESET[radius]
    return _first_number(_nested(config, "style.cornerRadius"), _nested(config, "theme.cornerRadius"), DEFAULT_CORNER_RADIUS)


def resolve_style(config: Dict[str, Any], scheme: str) -> StyleBlock:
    return StyleBlock(
        primary_color=resolve_primary_color(config),
        background_color=resolve_background_color(config, scheme),
        text_color=resolve_text_color(config, scheme),
        font_family=_first_text(_nested(config, "style.fontFamily")) or DEFAULT_FONT_FAMILY,
        font_size=_first_number(_nested(config, "style.fontSize"), DEFAULT_FONT_SIZE),
        corner_radius=resolve_corner_radius(config),
        position=_first_text(_nested(config, "style.position"), _nested(config, "theme.position.position"))
        or DEFAULT_POSITION,
    )


# --- 2. Theme resolvers ---
def resolve_typography(config: Dict[str, Any]) -> Optional[TypographyBlock]:
    font_family = _text(config.get("fontFamily"))
    font_size = _number(config.get("fontSize"))
    mono_family = _text(config.get("fontFamilyMono"))
    font_css = _text(config.get("customFontCss"))
    if not (font_family or font_size or mono_family or font_css):
        return None

    sources = None
    if font_css:
        sources = [FontSource(family=font_family or CUSTOM_FONT_FAMILY, src=font_css)]
    return TypographyBlock(
        font_family=font_family or TYPOGRAPHY_FONT_FAMILY,
        base_size=font_size or TYPOGRAPHY_BASE_SIZE,
        font_family_mono=mono_family,
        font_sources=sources,
    )


def resolve_grayscale(config: Dict[str, Any]) -> Optional[ColorTriple]:
    if not (config.get("useTintedGrayscale") or "tintHue" in config or "grayHue" in config):
        return None
    return ColorTriple(
        hue=_first_number(config.get("tintHue"), config.get("grayHue"), DEFAULT_GRAY_HUE),
        tint=_first_number(config.get("tintLevel"), config.get("grayTint"), DEFAULT_GRAY_TINT),
        shade=_first_number(config.get("shadeLevel"), config.get("grayShade"), DEFAULT_GRAY_SHADE),
    )


def resolve_accent(config: Dict[str, Any]) -> Optional[AccentColor]:
    if not _accent_enabled(config):
        return None
    level = _number(config.get("accentLevel"))
    return AccentColor(primary=config["accentColor"], level=int(level) if level else 1)


def resolve_surface(config: Dict[str, Any], scheme: str, background_color: str) -> Optional[SurfaceColor]:
    background = _text(config.get("surfaceBackgroundColor"))
    foreground = _text(config.get("surfaceForegroundColor"))
    if not config.get("useCustomSurfaceColors") or not (background or foreground):
        return None
    return SurfaceColor(
        background=background or background_color,
        foreground=foreground or DEFAULT_SURFACE_FOREGROUND[scheme],
    )


def resolve_icon_color(config: Dict[str, Any]) -> Optional[str]:
    if config.get("useCustomIconColor") and _text(config.get("customIconColor")):
        return config["customIconColor"]
    return _text(config.get("iconColor"))


def resolve_user_message(config: Dict[str, Any], primary_color: str) -> Optional[UserMessageColor]:
    text = _text(config.get("userMessageTextColor"))
    background = _text(config.get("userMessageBgColor"))
    if not config.get("useCustomUserMessageColors") or not (text or background):
        return None
    return UserMessageColor(text=text or "#ffffff", background=background or primary_color)


def resolve_theme(config: Dict[str, Any], scheme: str, style: StyleBlock) -> ThemeBlock:
    custom_text = None
    if config.get("useCustomTextColor"):
        custom_text = _text(config.get("customTextColor"))

    color = ColorBlock(
        accent=resolve_accent(config),
        grayscale=resolve_grayscale(config),
        surface=resolve_surface(config, scheme, style.background_color),
        user_message=resolve_user_message(config, style.primary_color),
        icon=resolve_icon_color(config),
        text=custom_text,
    )
    return ThemeBlock(
        color_scheme=scheme,
        radius=resolve_radius(config),
        density=_text(config.get("density")) or "normal",
        color=color,
        typography=resolve_typography(config),
    )


# --- 3. Content resolvers ---
def _starter_prompt(item: Any) -> Optional[StarterPrompt]:
    if isinstance(item, str) and item:
        return StarterPrompt(label=item, prompt=item)
    if isinstance(item, dict) and _text(item.get("label")):
        label = item["label"]
        return StarterPrompt(label=label, prompt=_text(item.get("prompt")) or label, icon=_text(item.get("icon")))
    return None


def resolve_start_screen(config: Dict[str, Any]) -> Optional[StartScreenBlock]:
    greeting = _text(config.get("greeting"))
    raw_prompts = config.get("starterPrompts")
    raw_prompts = raw_prompts if isinstance(raw_prompts, list) else []
    if not greeting and not raw_prompts:
        return None
    prompts = [p for p in (_starter_prompt(item) for item in raw_prompts) if p is not None]
    return StartScreenBlock(greeting=greeting, prompts=prompts)


def resolve_composer(config: Dict[str, Any]) -> Optional[ComposerBlock]:
    placeholder = _text(config.get("placeholder"))
    disclaimer = _text(config.get("disclaimer"))
    attachments_on = bool(config.get("enableAttachments"))
    if not (placeholder or disclaimer or attachments_on):
        return None

    attachments = None
    if attachments_on:
        attachments = AttachmentsBlock(
            enabled=True,
            max_size=_number(config.get("maxFileSize")) or DEFAULT_ATTACHMENT_SIZE,
            max_count=_number(config.get("maxFileCount")) or DEFAULT_ATTACHMENT_COUNT,
            accept=_strings(config.get("allowedExtensions")) or list(DEFAULT_EXTENSIONS),
        )
    return ComposerBlock(
        placeholder=placeholder or DEFAULT_PLACEHOLDER,
        disclaimer=disclaimer,
        attachments=attachments,
    )


def resolve_branding(config: Dict[str, Any]) -> BrandingBlock:
    launcher_icon = _text(_nested(config, "branding.launcherIcon")) or "chat"
    branding_enabled = _nested(config, "branding.brandingEnabled")
    return BrandingBlock(
        company_name=_first_text(_nested(config, "branding.companyName")) or DEFAULT_COMPANY_NAME,
        welcome_text=_first_text(config.get("greeting"), _nested(config, "branding.welcomeText"))
        or DEFAULT_WELCOME_TEXT,
        first_message=_first_text(_nested(config, "branding.firstMessage")) or "",
        logo_url=_text(_nested(config, "branding.logoUrl")),
        branding_enabled=branding_enabled if isinstance(branding_enabled, bool) else True,
        launcher_icon=launcher_icon,
        custom_launcher_icon_url=_text(_nested(config, "branding.customLauncherIconUrl"))
        if launcher_icon == "custom"
        else None,
    )


def resolve_features(config: Dict[str, Any]) -> FeaturesBlock:
    return FeaturesBlock(
        file_attachments_enabled=bool(config.get("enableAttachments") or _nested(config, "features.fileAttachments")),
        allowed_extensions=_strings(_nested(config, "features.allowedExtensions")) or list(DEFAULT_EXTENSIONS),
        max_file_size_kb=_number(_nested(config, "features.maxFileSize")) or DEFAULT_MAX_FILE_SIZE_KB,
    )


def resolve_connection(config: Dict[str, Any], origin: Optional[str]) -> ConnectionBlock:
    # relayEndpoint is always ours, whatever the document says
    return ConnectionBlock(
        webhook_url=_first_text(config.get("n8nWebhookUrl"), _nested(config, "connection.webhookUrl")) or "",
        relay_endpoint=relay_endpoint(origin),
    )


def resolve_license(widget_key: Optional[str], tier) -> Optional[LicenseBlock]:
    if not widget_key:
        return None
    plan = Tier.parse(tier or DEFAULT_TIER)
    return LicenseBlock(key=widget_key, active=True, plan=plan.value)


def translate_config(
    config: Dict[str, Any],
    *,
    origin: Optional[str] = None,
    widget_key: Optional[str] = None,
    tier=None,
) -> RuntimeConfig:
    """Builds the RuntimeConfig for a sanitized stored document.

    ``origin`` is the public origin the relay endpoint is built from; the
    configured WIDGET_PUBLIC_ORIGIN is used when it is omitted. A license
    block is attached only when ``widget_key`` is given.
    """
    scheme = resolve_color_scheme(config)
    style = resolve_style(config, scheme)

    advanced_styling = config.get("advancedStyling")
    behavior = config.get("behavior")
    widget_id = config.get("widgetId")

    runtime = RuntimeConfig(
        widget_id=widget_id if isinstance(widget_id, str) else None,
        license=resolve_license(widget_key, tier),
        branding=resolve_branding(config),
        style=style,
        theme=resolve_theme(config, scheme, style),
        start_screen=resolve_start_screen(config),
        composer=resolve_composer(config),
        features=resolve_features(config),
        connection=resolve_connection(config, origin),
        advanced_styling=advanced_styling if isinstance(advanced_styling, dict) else None,
        behavior=behavior if isinstance(behavior, dict) else None,
    )
    logger.debug(f"Translated config (scheme={scheme}, accent={runtime.theme.color.accent is not None})")
    return runtime
