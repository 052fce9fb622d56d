import logging
from typing import Any, Dict, List, Union

from chatwidget.core.errors import ConfigValidationError, ValidationIssue, ValidationRule
from chatwidget.core.rules import (
    ENUM_FIELDS,
    MISSING,
    NUMERIC_BOUNDS,
    REQUIRED_BRANDING_TEXT,
    TEXT_LIMITS,
    is_allowed,
    is_color_field,
    is_hex_color,
    is_number,
    is_secure_url,
    is_url_field,
    iter_fields,
    lookup,
)
from chatwidget.core.tiers import Tier, policy_for
from chatwidget.services.sanitizer import sanitize_config

logger = logging.getLogger("chatwidget.validator")


def _is_on(config: Dict[str, Any], path: str) -> bool:
    value = lookup(config, path)
    return value is not MISSING and bool(value)


# --- 1. Structural rules ---
def _check_required_text(config: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    for key in REQUIRED_BRANDING_TEXT:
        path = f"branding.{key}"
        value = lookup(config, path)
        if value is MISSING or value is None or value == "":
            issues.append(ValidationIssue(field_path=path, rule=ValidationRule.REQUIRED, message=f"{key} is required"))
        elif not isinstance(value, str):
            issues.append(ValidationIssue(field_path=path, rule=ValidationRule.TYPE, message=f"{key} must be text"))

    for path, limit in TEXT_LIMITS.items():
        value = lookup(config, path)
        if isinstance(value, str) and len(value) > limit:
            issues.append(
                ValidationIssue(
                    field_path=path,
                    rule=ValidationRule.RANGE,
                    message=f"Must be {limit} characters or less",
                )
            )
    return issues


def _check_numbers(config: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    for path, (low, high) in NUMERIC_BOUNDS.items():
        value = lookup(config, path)
        if value is MISSING:
            continue
        if not is_number(value):
            issues.append(ValidationIssue(field_path=path, rule=ValidationRule.TYPE, message="Must be a number"))
        elif not low <= value <= high:
            issues.append(
                ValidationIssue(
                    field_path=path,
                    rule=ValidationRule.RANGE,
                    message=f"Must be between {low} and {high}",
                )
            )
    return issues


def _check_formats(config: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    for container, key, name, path in iter_fields(config):
        value = container[key]
        if is_url_field(name):
            if value is not None and not is_secure_url(value):
                issues.append(
                    ValidationIssue(
                        field_path=path,
                        rule=ValidationRule.URL_FORMAT,
                        message="Must use HTTPS (or localhost for development)",
                    )
                )
        elif is_color_field(name, value) and not is_hex_color(value):
            issues.append(
                ValidationIssue(
                    field_path=path,
                    rule=ValidationRule.COLOR_FORMAT,
                    message="Must be a valid hex color (#RRGGBB)",
                )
            )
    return issues


def _check_enums(config: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    for path, (allowed, _) in ENUM_FIELDS.items():
        value = lookup(config, path)
        if value is MISSING or is_allowed(path, value):
            continue
        choices = ", ".join(sorted(allowed))
        issues.append(ValidationIssue(field_path=path, rule=ValidationRule.ENUM, message=f"Must be one of: {choices}"))
    return issues


# --- 2. Tier rules ---
def _check_tier(config: Dict[str, Any], tier: Tier) -> List[ValidationIssue]:
    policy = policy_for(tier)
    label = tier.value.capitalize()
    issues = []

    if policy.branding_forced_on and lookup(config, "branding.brandingEnabled") is not True:
        issues.append(
            ValidationIssue(
                field_path="branding.brandingEnabled",
                rule=ValidationRule.TIER,
                message=f"Branding must be enabled for {label} tier",
            )
        )
    if not policy.advanced_styling_allowed and _is_on(config, "advancedStyling.enabled"):
        issues.append(
            ValidationIssue(
                field_path="advancedStyling.enabled",
                rule=ValidationRule.TIER,
                message="Advanced styling is only available for Pro and Agency tiers",
            )
        )
    if not policy.email_transcript_allowed and _is_on(config, "features.emailTranscript"):
        issues.append(
            ValidationIssue(
                field_path="features.emailTranscript",
                rule=ValidationRule.TIER,
                message="Email transcript is only available for Pro and Agency tiers",
            )
        )
    if not policy.rating_prompt_allowed and _is_on(config, "features.ratingPrompt"):
        issues.append(
            ValidationIssue(
                field_path="features.ratingPrompt",
                rule=ValidationRule.TIER,
                message="Rating prompt is only available for Pro and Agency tiers",
            )
        )
    return issues


# --- 3. Cross-field rules ---
def _check_cross_field(config: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    if lookup(config, "branding.launcherIcon") == "custom" and not _is_on(config, "branding.customLauncherIconUrl"):
        issues.append(
            ValidationIssue(
                field_path="branding.customLauncherIconUrl",
                rule=ValidationRule.CROSS_FIELD,
                message='Custom launcher icon URL required when launcher icon type is "custom"',
            )
        )
    if (
        _is_on(config, "advancedStyling.enabled")
        and _is_on(config, "advancedStyling.messages.showAvatar")
        and not _is_on(config, "advancedStyling.messages.avatarUrl")
    ):
        issues.append(
            ValidationIssue(
                field_path="advancedStyling.messages.avatarUrl",
                rule=ValidationRule.CROSS_FIELD,
                message="Avatar URL required when show avatar is enabled",
            )
        )
    return issues


def validate_config(config: Dict[str, Any], tier: Union[Tier, str]) -> List[ValidationIssue]:
    """Collects every rule violation in the document. An empty list means valid."""
    tier = Tier.parse(tier)
    issues = [
        *_check_required_text(config),
        *_check_numbers(config),
        *_check_formats(config),
        *_check_enums(config),
        *_check_tier(config, tier),
        *_check_cross_field(config),
    ]
    if issues:
        logger.info(f"Config rejected for {tier.value} tier with {len(issues)} issue(s)")
    return issues


def ensure_valid(config: Dict[str, Any], tier: Union[Tier, str]) -> None:
    issues = validate_config(config, tier)
    if issues:
        raise ConfigValidationError(issues)


def sanitize_and_validate(config: Dict[str, Any], tier: Union[Tier, str]) -> Dict[str, Any]:
    """Sanitizes then gates a raw document. Raises ConfigValidationError if anything is left."""
    sanitized = sanitize_config(config, tier)
    ensure_valid(sanitized, tier)
    return sanitized
