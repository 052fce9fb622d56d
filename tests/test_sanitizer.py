"""Tests for raw config repair and tier coercion."""

from __future__ import annotations

import copy

import pytest

from chatwidget.core.tiers import Tier
from chatwidget.services.sanitizer import sanitize_config
from chatwidget.services.validator import validate_config


def _messy_config() -> dict[str, object]:
    return {
        "themeMode": "neon",
        "accentColor": "blue",
        "fontSize": 40,
        "tintHue": 400,
        "shadeLevel": "dark",
        "radius": "round",
        "n8nWebhookUrl": "http://hooks.example.com/abc",
        "starterPrompts": [{"label": "#1 question", "prompt": "What is #1?"}, "Pricing"],
        "branding": {
            "companyName": "",
            "brandingEnabled": False,
            "logoUrl": "ftp://files.example.com/logo.png",
            "launcherIcon": "custom",
            "customLauncherIconUrl": "not a url",
        },
        "style": {"primaryColor": "#F00", "theme": "sepia", "position": "middle"},
        "theme": {
            "mode": "neon",
            "colors": {"primary": "#abc", "text": "#12"},
            "typography": {"fontSize": 50},
        },
        "advancedStyling": {
            "enabled": True,
            "messages": {"showAvatar": True, "avatarUrl": None, "bubblePadding": 2, "linkColor": "nope"},
        },
        "behavior": {"autoOpenDelay": 120},
        "features": {"emailTranscript": True, "ratingPrompt": True},
    }


def test_three_digit_hex_expanded_and_six_digit_untouched() -> None:
    result = sanitize_config({"style": {"primaryColor": "#F00", "backgroundColor": "#4F46E5"}}, "pro")
    assert result["style"]["primaryColor"] == "#FF0000"
    assert result["style"]["backgroundColor"] == "#4F46E5"


def test_malformed_colors_get_named_defaults() -> None:
    result = sanitize_config(_messy_config(), "pro")
    assert result["accentColor"] == "#0066FF"
    assert result["theme"]["colors"]["text"] == "#000000"
    assert result["theme"]["colors"]["primary"] == "#aabbcc"
    assert result["advancedStyling"]["messages"]["linkColor"] == "#000000"


def test_free_text_starting_with_hash_is_left_alone() -> None:
    result = sanitize_config(_messy_config(), "pro")
    assert result["starterPrompts"][0] == {"label": "#1 question", "prompt": "What is #1?"}
    assert result["starterPrompts"][1] == "Pricing"


def test_colors_inside_string_lists_are_repaired() -> None:
    config = {
        "advancedStyling": {"palette": ["#abc", "#4F46E5", "#12"]},
        "starterPrompts": ["#1 question", "Pricing"],
    }
    result = sanitize_config(config, "pro")
    assert result["advancedStyling"]["palette"] == ["#aabbcc", "#4F46E5", "#000000"]
    assert result["starterPrompts"] == ["#1 question", "Pricing"]
    assert config["advancedStyling"]["palette"][0] == "#abc"


def test_url_scheme_enforcement() -> None:
    config = {
        "n8nWebhookUrl": "http://hooks.example.com/abc",
        "branding": {"logoUrl": "http://cdn.example.com/logo.png"},
        "connection": {"webhookUrl": "http://localhost:5678/webhook"},
    }
    result = sanitize_config(config, "basic")
    assert result["n8nWebhookUrl"] == "https://hooks.example.com/abc"
    assert result["branding"]["logoUrl"] == "https://cdn.example.com/logo.png"
    assert result["connection"]["webhookUrl"] == "https://localhost:5678/webhook"


@pytest.mark.parametrize("url", ["ftp://files.example.com/logo.png", "not a url", "", 42])
def test_unusable_urls_become_none(url: object) -> None:
    result = sanitize_config({"branding": {"logoUrl": url}}, "pro")
    assert result["branding"]["logoUrl"] is None


def test_basic_tier_switches_premium_features_off() -> None:
    result = sanitize_config(_messy_config(), "basic")
    assert result["branding"]["brandingEnabled"] is True
    assert result["advancedStyling"]["enabled"] is False
    assert result["features"]["emailTranscript"] is False
    assert result["features"]["ratingPrompt"] is False


def test_paid_tiers_never_force_features_on() -> None:
    result = sanitize_config({"branding": {"brandingEnabled": False}, "features": {"ratingPrompt": False}}, Tier.PRO)
    assert result["branding"]["brandingEnabled"] is False
    assert result["features"]["ratingPrompt"] is False
    assert "advancedStyling" not in result


def test_required_branding_text_backfilled() -> None:
    result = sanitize_config({}, "basic")
    assert result["branding"]["companyName"] == "My Company"
    assert result["branding"]["welcomeText"] == "How can we help?"
    assert result["branding"]["firstMessage"] == "Hello! How can I assist you today?"


def test_custom_icon_without_url_reverts_to_default() -> None:
    result = sanitize_config(_messy_config(), "pro")
    assert result["branding"]["launcherIcon"] == "chat"
    assert result["branding"]["customLauncherIconUrl"] is None


def test_custom_icon_with_url_is_kept() -> None:
    config = {"branding": {"launcherIcon": "custom", "customLauncherIconUrl": "http://cdn.example.com/icon.svg"}}
    result = sanitize_config(config, "pro")
    assert result["branding"]["launcherIcon"] == "custom"
    assert result["branding"]["customLauncherIconUrl"] == "https://cdn.example.com/icon.svg"


def test_non_custom_icon_clears_url_and_unknown_icon_resets() -> None:
    kept = sanitize_config({"branding": {"launcherIcon": "bot", "customLauncherIconUrl": "https://x.example.com/i.png"}}, "pro")
    assert kept["branding"]["launcherIcon"] == "bot"
    assert kept["branding"]["customLauncherIconUrl"] is None

    reset = sanitize_config({"branding": {"launcherIcon": "rocket"}}, "pro")
    assert reset["branding"]["launcherIcon"] == "chat"


def test_unrecognized_enumerations_dropped() -> None:
    result = sanitize_config(_messy_config(), "pro")
    assert "themeMode" not in result
    assert "radius" not in result
    assert "theme" not in result["style"]
    assert "position" not in result["style"]
    assert "mode" not in result["theme"]


def test_valid_theme_mode_kept() -> None:
    assert sanitize_config({"themeMode": "dark"}, "basic")["themeMode"] == "dark"


def test_numeric_fields_clamped_or_dropped() -> None:
    result = sanitize_config(_messy_config(), "pro")
    assert result["fontSize"] == 20
    assert result["tintHue"] == 360
    assert "shadeLevel" not in result
    assert result["theme"]["typography"]["fontSize"] == 20
    assert result["advancedStyling"]["messages"]["bubblePadding"] == 5
    assert result["behavior"]["autoOpenDelay"] == 60


def test_input_is_not_mutated() -> None:
    config = _messy_config()
    snapshot = copy.deepcopy(config)
    result = sanitize_config(config, "basic")
    assert config == snapshot
    assert result is not config


@pytest.mark.parametrize("tier", ["basic", "pro", "agency"])
def test_idempotent(tier: str) -> None:
    once = sanitize_config(_messy_config(), tier)
    assert sanitize_config(once, tier) == once


def test_sanitized_basic_config_always_validates() -> None:
    for config in (_messy_config(), {}, {"branding": None, "features": {"emailTranscript": "yes"}}):
        assert validate_config(sanitize_config(config, "basic"), "basic") == []


def test_unknown_tier_rejected() -> None:
    with pytest.raises(ValueError):
        sanitize_config({}, "platinum")
