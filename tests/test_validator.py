"""Tests for the validation gate."""

from __future__ import annotations

import pytest

from chatwidget.core.errors import ConfigValidationError, ValidationRule
from chatwidget.services.validator import ensure_valid, sanitize_and_validate, validate_config


def _valid_config() -> dict[str, object]:
    return {
        "branding": {
            "companyName": "Acme",
            "welcomeText": "Hi!",
            "firstMessage": "How can we help?",
            "brandingEnabled": True,
            "launcherIcon": "chat",
            "logoUrl": "https://cdn.acme.test/logo.png",
        },
        "style": {"primaryColor": "#4F46E5", "position": "bottom-left"},
        "connection": {"webhookUrl": "https://hooks.acme.test/chat", "timeoutSeconds": 30},
    }


def _rules(issues) -> dict[str, str]:
    return {issue.field_path: issue.rule for issue in issues}


def test_valid_config_has_no_issues() -> None:
    assert validate_config(_valid_config(), "basic") == []
    assert validate_config(_valid_config(), "agency") == []


def test_collects_every_violation() -> None:
    config = _valid_config()
    config["fontSize"] = 40
    config["style"]["primaryColor"] = "#FFF"
    config["branding"]["logoUrl"] = "http://cdn.acme.test/logo.png"
    config["themeMode"] = "neon"
    config["connection"]["timeoutSeconds"] = "soon"

    rules = _rules(validate_config(config, "pro"))
    assert rules == {
        "fontSize": ValidationRule.RANGE,
        "connection.timeoutSeconds": ValidationRule.TYPE,
        "style.primaryColor": ValidationRule.COLOR_FORMAT,
        "branding.logoUrl": ValidationRule.URL_FORMAT,
        "themeMode": ValidationRule.ENUM,
    }


def test_missing_required_text() -> None:
    config = _valid_config()
    config["branding"]["companyName"] = ""
    del config["branding"]["firstMessage"]

    rules = _rules(validate_config(config, "pro"))
    assert rules["branding.companyName"] == ValidationRule.REQUIRED
    assert rules["branding.firstMessage"] == ValidationRule.REQUIRED


def test_text_length_limits() -> None:
    config = _valid_config()
    config["branding"]["companyName"] = "x" * 101
    assert _rules(validate_config(config, "pro")) == {"branding.companyName": ValidationRule.RANGE}


def test_basic_tier_restrictions() -> None:
    config = _valid_config()
    config["branding"]["brandingEnabled"] = False
    config["advancedStyling"] = {"enabled": True}
    config["features"] = {"emailTranscript": True, "ratingPrompt": True}

    basic = _rules(validate_config(config, "basic"))
    assert basic == {
        "branding.brandingEnabled": ValidationRule.TIER,
        "advancedStyling.enabled": ValidationRule.TIER,
        "features.emailTranscript": ValidationRule.TIER,
        "features.ratingPrompt": ValidationRule.TIER,
    }
    assert validate_config(config, "pro") == []


def test_custom_launcher_icon_needs_url() -> None:
    config = _valid_config()
    config["branding"]["launcherIcon"] = "custom"
    config["branding"]["customLauncherIconUrl"] = None

    issues = validate_config(config, "pro")
    assert _rules(issues) == {"branding.customLauncherIconUrl": ValidationRule.CROSS_FIELD}


def test_avatar_url_required_only_with_advanced_styling_enabled() -> None:
    config = _valid_config()
    config["advancedStyling"] = {"enabled": True, "messages": {"showAvatar": True, "avatarUrl": None}}
    assert _rules(validate_config(config, "pro")) == {
        "advancedStyling.messages.avatarUrl": ValidationRule.CROSS_FIELD
    }

    config["advancedStyling"]["enabled"] = False
    assert validate_config(config, "pro") == []


def test_ensure_valid_raises_with_issues() -> None:
    config = _valid_config()
    config["branding"]["brandingEnabled"] = False

    with pytest.raises(ConfigValidationError) as exc_info:
        ensure_valid(config, "basic")

    error = exc_info.value
    assert len(error.issues) == 1
    assert error.to_dict() == [
        {
            "fieldPath": "branding.brandingEnabled",
            "rule": "tier",
            "message": "Branding must be enabled for Basic tier",
        }
    ]
    assert "branding.brandingEnabled" in str(error)


def test_sanitize_and_validate_repairs_then_gates() -> None:
    config = _valid_config()
    config["branding"]["brandingEnabled"] = False
    config["style"]["primaryColor"] = "#FFF"

    result = sanitize_and_validate(config, "basic")
    assert result["branding"]["brandingEnabled"] is True
    assert result["style"]["primaryColor"] == "#FFFFFF"


def test_sanitize_and_validate_reports_what_cannot_be_repaired() -> None:
    config = _valid_config()
    config["advancedStyling"] = {"enabled": True, "messages": {"showAvatar": True}}

    with pytest.raises(ConfigValidationError):
        sanitize_and_validate(config, "pro")


def test_colors_inside_string_lists_are_checked() -> None:
    config = _valid_config()
    config["advancedStyling"] = {"palette": ["#4F46E5", "#12"]}
    config["starterPrompts"] = ["#1 question"]

    rules = _rules(validate_config(config, "pro"))

    assert rules == {"advancedStyling.palette[1]": ValidationRule.COLOR_FORMAT}
