"""Turns a RuntimeConfig into the flat cw-* variable map the embed script renders."""

from __future__ import annotations

import logging
from typing import Dict

from chatwidget.core.color_math import Number, format_number
from chatwidget.models.runtime import ColorScheme, RuntimeConfig
from chatwidget.services.palettes import (
    DEFAULT_GRAYSCALE,
    GRAYSCALE_LIGHTNESS,
    accent_palette,
    grayscale_ramp,
    surface_palette,
)

logger = logging.getLogger("chatwidget.theme")

RADIUS_PRESETS: Dict[str, int] = {"none": 0, "small": 6, "medium": 12, "large": 18, "pill": 9999}
DEFAULT_RADIUS = "medium"

# density -> (padding factor, gap factor)
DENSITY_PRESETS: Dict[str, tuple[float, float]] = {
    "compact": (0.75, 0.75),
    "normal": (1, 1),
    "spacious": (1.25, 1.25),
}
DEFAULT_DENSITY = "normal"

SPACING_STEPS: tuple[tuple[str, int], ...] = (("xs", 4), ("sm", 8), ("md", 12), ("lg", 16), ("xl", 24))
GAP_STEP = 8

DEFAULT_MONO_FAMILY = "ui-monospace, SFMono-Regular, Menlo, Consolas, monospace"
USER_MESSAGE_ON_ACCENT = "#ffffff"

# Used when neither grayscale nor an explicit override provides the role
FALLBACK_SURFACES: Dict[str, Dict[str, str]] = {
    ColorScheme.LIGHT: {
        "cw-surface-bg": "#ffffff",
        "cw-surface-fg": "#f8fafc",
        "cw-composer-surface": "#ffffff",
        "cw-border-color": "rgba(0,0,0,0.08)",
        "cw-hover-surface": "rgba(0,0,0,0.05)",
        "cw-icon-color": "#6b7280",
    },
    ColorScheme.DARK: {
        "cw-surface-bg": "#1a1a1a",
        "cw-surface-fg": "#2a2a2a",
        "cw-composer-surface": "#262626",
        "cw-border-color": "rgba(255,255,255,0.08)",
        "cw-hover-surface": "rgba(255,255,255,0.05)",
        "cw-icon-color": "#a1a1aa",
    },
}

ELEVATION: Dict[str, Dict[str, str]] = {
    ColorScheme.LIGHT: {
        "cw-border-color-strong": "rgba(0,0,0,0.15)",
        "cw-shadow-sm": "0 1px 2px rgba(0,0,0,0.05)",
        "cw-shadow-md": "0 4px 12px rgba(0,0,0,0.1)",
        "cw-shadow-lg": "0 8px 24px rgba(0,0,0,0.15)",
    },
    ColorScheme.DARK: {
        "cw-border-color-strong": "rgba(255,255,255,0.2)",
        "cw-shadow-sm": "0 1px 2px rgba(0,0,0,0.3)",
        "cw-shadow-md": "0 4px 12px rgba(0,0,0,0.4)",
        "cw-shadow-lg": "0 8px 24px rgba(0,0,0,0.5)",
    },
}

# Every name the embed script may rely on; all are present after a build.
VARIABLE_NAMES: tuple[str, ...] = (
    "cw-primary-color",
    "cw-bg-color",
    "cw-text-color",
    "cw-font-family",
    "cw-font-family-mono",
    "cw-font-size",
    "cw-font-size-sm",
    "cw-font-size-lg",
    "cw-font-size-xl",
    "cw-corner-radius",
    "cw-color-scheme",
    "cw-radius-sm",
    "cw-radius-md",
    "cw-radius-lg",
    "cw-radius-xl",
    "cw-radius-full",
    *(f"cw-spacing-{name}" for name, _ in SPACING_STEPS),
    "cw-gap",
    *(f"cw-gray-{step}" for step in range(len(GRAYSCALE_LIGHTNESS))),
    "cw-surface-bg",
    "cw-surface-fg",
    "cw-composer-surface",
    "cw-border-color",
    "cw-border-color-strong",
    "cw-hover-surface",
    "cw-icon-color",
    "cw-accent-primary",
    "cw-accent-hover",
    "cw-accent-active",
    "cw-accent-light",
    "cw-accent-lighter",
    "cw-user-msg-text",
    "cw-user-msg-bg",
    "cw-assistant-msg-text",
    "cw-assistant-msg-bg",
    "cw-shadow-sm",
    "cw-shadow-md",
    "cw-shadow-lg",
)


def px(value: Number) -> str:
    return f"{format_number(value)}px"


def _radius_variables(radius: str) -> Dict[str, str]:
    base = RADIUS_PRESETS.get(radius, RADIUS_PRESETS[DEFAULT_RADIUS])
    return {
        "cw-radius-sm": px(max(0, base - 4)),
        "cw-radius-md": px(base),
        "cw-radius-lg": px(base + 4),
        "cw-radius-xl": px(base + 8),
        "cw-radius-full": "9999px" if radius == "pill" else px(base * 2),
    }


def _spacing_variables(density: str) -> Dict[str, str]:
    padding, gap = DENSITY_PRESETS.get(density, DENSITY_PRESETS[DEFAULT_DENSITY])
    variables = {f"cw-spacing-{name}": px(step * padding) for name, step in SPACING_STEPS}
    variables["cw-gap"] = px(GAP_STEP * gap)
    return variables


def _font_size_variables(base_size: Number) -> Dict[str, str]:
    return {
        "cw-font-size": px(base_size),
        "cw-font-size-sm": px(base_size - 2),
        "cw-font-size-lg": px(base_size + 2),
        "cw-font-size-xl": px(base_size + 4),
    }


def _accent_variables(primary: str, level: int) -> Dict[str, str]:
    palette = accent_palette(primary, level)
    return {
        "cw-accent-primary": palette.primary,
        "cw-accent-hover": palette.hover,
        "cw-accent-active": palette.active,
        "cw-accent-light": palette.light,
        "cw-accent-lighter": palette.lighter,
    }


def build_variables(config: RuntimeConfig) -> Dict[str, str]:
    """Builds the complete cw-* variable map for one runtime configuration.

    Layering, later wins: hardcoded light/dark fallbacks, then values derived
    from the grayscale and accent settings, then explicit color overrides,
    then typography overrides.
    """
    style = config.style
    theme = config.theme
    color = theme.color
    scheme = ColorScheme.DARK if theme.color_scheme == ColorScheme.DARK else ColorScheme.LIGHT
    is_dark = scheme == ColorScheme.DARK

    # 1. Base identity
    variables: Dict[str, str] = {
        "cw-primary-color": style.primary_color,
        "cw-bg-color": style.background_color,
        "cw-text-color": style.text_color,
        "cw-font-family": style.font_family,
        "cw-font-family-mono": DEFAULT_MONO_FAMILY,
        "cw-corner-radius": px(style.corner_radius),
        "cw-color-scheme": scheme,
    }
    variables.update(_font_size_variables(style.font_size))

    # 2-3. Radius and density presets
    variables.update(_radius_variables(theme.radius))
    variables.update(_spacing_variables(theme.density))

    variables.update(FALLBACK_SURFACES[scheme])
    variables.update(ELEVATION[scheme])

    # 4. Grayscale ramp + semantic surfaces
    grayscale = color.grayscale
    if grayscale is not None:
        variables.update(
            {f"cw-{k}": v for k, v in grayscale_ramp(grayscale.hue, grayscale.tint, grayscale.shade).items()}
        )
        surfaces = surface_palette(grayscale.hue, grayscale.tint, grayscale.shade, is_dark)
        variables["cw-surface-bg"] = surfaces.bg
        variables["cw-surface-fg"] = surfaces.surface
        variables["cw-composer-surface"] = surfaces.composer_surface
        variables["cw-border-color"] = surfaces.border
        variables["cw-text-color"] = surfaces.text
        variables["cw-icon-color"] = surfaces.sub_text
        variables["cw-hover-surface"] = surfaces.hover_surface
    else:
        variables.update({f"cw-{k}": v for k, v in grayscale_ramp(*DEFAULT_GRAYSCALE).items()})

    # 5. Accent palette
    accent = color.accent
    if accent is not None:
        variables.update(_accent_variables(accent.primary, accent.level))
        variables["cw-primary-color"] = accent.primary
    else:
        variables.update(_accent_variables(style.primary_color, 1))

    # 6. Explicit overrides
    if color.surface is not None:
        variables["cw-surface-bg"] = color.surface.background
        variables["cw-surface-fg"] = color.surface.foreground
    if color.icon:
        variables["cw-icon-color"] = color.icon
    if color.text:
        variables["cw-text-color"] = color.text

    # 7. Message colors
    if color.user_message is not None:
        variables["cw-user-msg-text"] = color.user_message.text
        variables["cw-user-msg-bg"] = color.user_message.background
    elif accent is not None:
        variables["cw-user-msg-text"] = USER_MESSAGE_ON_ACCENT
        variables["cw-user-msg-bg"] = accent.primary
    else:
        variables["cw-user-msg-text"] = variables["cw-text-color"]
        variables["cw-user-msg-bg"] = variables["cw-surface-fg"]
    variables["cw-assistant-msg-text"] = variables["cw-text-color"]
    variables["cw-assistant-msg-bg"] = "transparent"

    # 8. Typography overrides
    typography = theme.typography
    if typography is not None:
        if typography.base_size:
            variables.update(_font_size_variables(typography.base_size))
        if typography.font_family:
            variables["cw-font-family"] = typography.font_family
        if typography.font_family_mono:
            variables["cw-font-family-mono"] = typography.font_family_mono

    missing = [name for name in VARIABLE_NAMES if name not in variables]
    assert not missing, f"variable builder left names unset: {missing}"

    logger.debug(f"Built {len(VARIABLE_NAMES)} theme variables (scheme={scheme})")
    return {name: variables[name] for name in VARIABLE_NAMES}


def render_css(variables: Dict[str, str], selector: str = ":root") -> str:
    """Emits the variable map as a CSS custom-property block."""
    lines = "\n".join(f"  --{name}: {value};" for name, value in variables.items())
    return f"{selector} {{\n{lines}\n}}"
