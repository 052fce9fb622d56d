"""Color derivation: grayscale ramp, light/dark surface palette, accent palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from chatwidget.core.color_math import Number, darken, hsl, hsla, lighten

GRAYSCALE_LIGHTNESS: tuple[int, ...] = (98, 96, 92, 88, 80, 70, 60, 50, 40, 30, 22, 14, 8)
DEFAULT_GRAYSCALE = (220, 0, 0)


@dataclass(frozen=True, slots=True)
class SurfacePalette:
    """The seven semantic surface roles for one color scheme."""

    bg: str
    surface: str
    composer_surface: str
    border: str
    text: str
    sub_text: str
    hover_surface: str


@dataclass(frozen=True, slots=True)
class AccentPalette:
    primary: str
    hover: str
    active: str
    light: str
    lighter: str


def grayscale_lightness(step: int, shade: Number = 0) -> Number:
    return max(0, min(100, GRAYSCALE_LIGHTNESS[step] + shade * 2))


def grayscale_ramp(hue: Number, tint: Number, shade: Number = 0) -> Dict[str, str]:
    """13 neutral steps keyed gray-0 (lightest) .. gray-12 (darkest)."""
    saturation = tint * 2
    return {
        f"gray-{step}": hsl(hue, saturation, grayscale_lightness(step, shade))
        for step in range(len(GRAYSCALE_LIGHTNESS))
    }


def surface_palette(hue: Number, tint: Number, shade: Number, is_dark: bool) -> SurfacePalette:
    if is_dark:
        saturation = 5 + tint * 2
        lightness = 10 + shade * 0.5
        muted = max(0, saturation - 10)
        surface = hsl(hue, saturation, lightness + 5)
        return SurfacePalette(
            bg=hsl(hue, saturation, lightness),
            surface=surface,
            composer_surface=surface,
            border=hsla(hue, saturation, 90, 0.08),
            text=hsl(hue, muted, 90),
            sub_text=hsl(hue, muted, 60),
            hover_surface=hsla(hue, saturation, 90, 0.05),
        )

    saturation = 10 + tint * 3
    lightness = 98 - shade * 2
    return SurfacePalette(
        bg=hsl(hue, saturation, lightness),
        surface=hsl(hue, saturation, lightness - 5),
        composer_surface=hsl(hue, saturation, 100),
        border=hsla(hue, saturation, 10, 0.08),
        text=hsl(hue, saturation, 10),
        sub_text=hsl(hue, saturation, 40),
        hover_surface=hsla(hue, saturation, 10, 0.05),
    )


def accent_palette(base_color: str, level: int = 1) -> AccentPalette:
    hover_amount = 0.15 + level * 0.05
    return AccentPalette(
        primary=base_color,
        hover=darken(base_color, hover_amount),
        active=darken(base_color, hover_amount * 1.5),
        light=lighten(base_color, 0.9),
        lighter=lighten(base_color, 0.95),
    )
