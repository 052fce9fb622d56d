"""Tests for the cw-* variable map and its CSS rendering."""

from __future__ import annotations

from chatwidget.services.theme_builder import VARIABLE_NAMES, build_variables, render_css
from chatwidget.services.translator import translate_config


def _variables(config: dict[str, object]) -> dict[str, str]:
    return build_variables(translate_config(config, origin="https://widgets.example.com"))


def test_every_variable_is_present() -> None:
    for config in ({}, {"themeMode": "dark"}, {"accentColor": "#4F46E5", "tintHue": 200}):
        variables = _variables(config)
        assert list(variables) == list(VARIABLE_NAMES)
        assert all(isinstance(value, str) and value for value in variables.values())


def test_light_defaults() -> None:
    variables = _variables({})
    assert variables["cw-color-scheme"] == "light"
    assert variables["cw-primary-color"] == "#0066FF"
    assert variables["cw-accent-primary"] == "#0066FF"
    assert variables["cw-surface-bg"] == "#ffffff"
    assert variables["cw-surface-fg"] == "#f8fafc"
    assert variables["cw-icon-color"] == "#6b7280"
    assert variables["cw-gray-0"] == "hsl(220, 0%, 98%)"
    assert variables["cw-gray-12"] == "hsl(220, 0%, 8%)"
    assert variables["cw-font-size"] == "14px"
    assert variables["cw-font-size-sm"] == "12px"
    assert variables["cw-font-size-xl"] == "18px"
    assert variables["cw-assistant-msg-bg"] == "transparent"


def test_dark_fallbacks_without_grayscale() -> None:
    variables = _variables({"themeMode": "dark"})
    assert variables["cw-surface-bg"] == "#1a1a1a"
    assert variables["cw-composer-surface"] == "#262626"
    assert variables["cw-border-color"] == "rgba(255,255,255,0.08)"
    assert variables["cw-icon-color"] == "#a1a1aa"
    assert variables["cw-text-color"] == "#e5e5e5"
    assert variables["cw-shadow-lg"] == "0 8px 24px rgba(0,0,0,0.5)"


def test_radius_presets() -> None:
    medium = _variables({})
    assert (medium["cw-radius-sm"], medium["cw-radius-md"], medium["cw-radius-full"]) == ("8px", "12px", "24px")

    pill = _variables({"radius": "pill"})
    assert pill["cw-radius-full"] == "9999px"

    none = _variables({"radius": "none"})
    assert none["cw-radius-sm"] == "0px"
    assert none["cw-radius-full"] == "0px"
    assert none["cw-corner-radius"] == "0px"


def test_unknown_radius_falls_back_to_medium() -> None:
    assert _variables({"radius": "huge"})["cw-radius-md"] == "12px"


def test_density_presets() -> None:
    compact = _variables({"density": "compact"})
    assert compact["cw-spacing-xs"] == "3px"
    assert compact["cw-spacing-xl"] == "18px"
    assert compact["cw-gap"] == "6px"

    spacious = _variables({"density": "spacious"})
    assert spacious["cw-spacing-md"] == "15px"
    assert spacious["cw-gap"] == "10px"


def test_grayscale_drives_surface_roles() -> None:
    variables = _variables({"themeMode": "dark", "tintHue": 220, "tintLevel": 10, "shadeLevel": 0})
    assert variables["cw-surface-bg"] == "hsl(220, 25%, 10%)"
    assert variables["cw-surface-fg"] == "hsl(220, 25%, 15%)"
    assert variables["cw-text-color"] == "hsl(220, 15%, 90%)"
    assert variables["cw-icon-color"] == "hsl(220, 15%, 60%)"
    assert variables["cw-assistant-msg-text"] == variables["cw-text-color"]
    assert variables["cw-gray-0"] == "hsl(220, 20%, 98%)"


def test_explicit_overrides_beat_grayscale() -> None:
    variables = _variables(
        {
            "tintHue": 220,
            "useCustomSurfaceColors": True,
            "surfaceBackgroundColor": "#101010",
            "useCustomTextColor": True,
            "customTextColor": "#EEEEEE",
            "useCustomIconColor": True,
            "customIconColor": "#123456",
        }
    )
    assert variables["cw-surface-bg"] == "#101010"
    assert variables["cw-bg-color"] == "#101010"
    assert variables["cw-text-color"] == "#EEEEEE"
    assert variables["cw-icon-color"] == "#123456"


def test_accent_sets_primary_and_user_message() -> None:
    variables = _variables({"accentColor": "#4F46E5"})
    assert variables["cw-primary-color"] == "#4F46E5"
    assert variables["cw-accent-primary"] == "#4F46E5"
    assert variables["cw-user-msg-bg"] == "#4F46E5"
    assert variables["cw-user-msg-text"] == "#ffffff"


def test_user_message_falls_back_to_text_and_surface() -> None:
    variables = _variables({"accentColor": "#4F46E5", "useAccent": False})
    assert variables["cw-user-msg-text"] == variables["cw-text-color"]
    assert variables["cw-user-msg-bg"] == variables["cw-surface-fg"]


def test_explicit_user_message_colors_win() -> None:
    variables = _variables(
        {
            "accentColor": "#4F46E5",
            "useCustomUserMessageColors": True,
            "userMessageTextColor": "#000000",
            "userMessageBgColor": "#FFFF00",
        }
    )
    assert variables["cw-user-msg-text"] == "#000000"
    assert variables["cw-user-msg-bg"] == "#FFFF00"


def test_typography_applied_last() -> None:
    variables = _variables({"fontFamily": "Inter", "fontSize": 18, "fontFamilyMono": "JetBrains Mono"})
    assert variables["cw-font-family"] == "Inter"
    assert variables["cw-font-family-mono"] == "JetBrains Mono"
    assert variables["cw-font-size"] == "18px"
    assert variables["cw-font-size-sm"] == "16px"
    assert variables["cw-font-size-lg"] == "20px"
    assert variables["cw-font-size-xl"] == "22px"


def test_build_is_deterministic() -> None:
    config = {"themeMode": "dark", "accentColor": "#0ea5e9", "tintHue": 12, "tintLevel": 3, "radius": "large"}
    first = _variables(config)
    second = _variables(config)
    assert first == second
    assert render_css(first) == render_css(second)


def test_render_css_block() -> None:
    assert render_css({"cw-a": "1px", "cw-b": "red"}) == ":root {\n  --cw-a: 1px;\n  --cw-b: red;\n}"
