import copy
import logging
from typing import Any, Dict, Union

from chatwidget.core.rules import (
    DEFAULT_LAUNCHER_ICON,
    ENUM_FIELDS,
    MISSING,
    NUMERIC_BOUNDS,
    REQUIRED_BRANDING_TEXT,
    TEXT_LIMITS,
    clamp,
    is_allowed,
    is_color_field,
    is_number,
    is_url_field,
    iter_fields,
    lookup,
    normalize_color,
    normalize_url,
    parent_of,
)
from chatwidget.core.tiers import Tier, policy_for

logger = logging.getLogger("chatwidget.sanitizer")


def _apply_tier_policy(config: Dict[str, Any], tier: Tier):
    """Coerces tier-gated flags. Only ever switches features off, never on."""
    policy = policy_for(tier)

    advanced = config.get("advancedStyling")
    if not policy.advanced_styling_allowed and isinstance(advanced, dict):
        if advanced.get("enabled") is not False:
            logger.debug(f"[{tier.value}] advancedStyling.enabled forced off")
        advanced["enabled"] = False

    features = config.get("features")
    if isinstance(features, dict):
        if not policy.email_transcript_allowed:
            features["emailTranscript"] = False
        if not policy.rating_prompt_allowed:
            features["ratingPrompt"] = False

    if policy.branding_forced_on:
        if config["branding"].get("brandingEnabled") is not True:
            logger.debug(f"[{tier.value}] branding.brandingEnabled forced on")
        config["branding"]["brandingEnabled"] = True


def _fix_branding_text(branding: Dict[str, Any]):
    for key, default in REQUIRED_BRANDING_TEXT.items():
        value = branding.get(key)
        if not isinstance(value, str) or not value:
            logger.debug(f"branding.{key} backfilled")
            branding[key] = default

    for path, limit in TEXT_LIMITS.items():
        container, leaf = parent_of({"branding": branding}, path)
        value = container.get(leaf) if container is not None else None
        if isinstance(value, str) and len(value) > limit:
            logger.debug(f"{path} truncated to {limit} characters")
            container[leaf] = value[:limit]


def _fix_enums(config: Dict[str, Any]):
    for path, (_, replacement) in ENUM_FIELDS.items():
        value = lookup(config, path)
        if value is MISSING or is_allowed(path, value):
            continue
        container, leaf = parent_of(config, path)
        if replacement is None:
            logger.debug(f"{path}={value!r} not recognized, dropped")
            del container[leaf]
        else:
            logger.debug(f"{path}={value!r} not recognized, replaced with {replacement!r}")
            container[leaf] = replacement


def _fix_colors_and_urls(config: Dict[str, Any]):
    for container, key, name, path in iter_fields(config):
        value = container[key]
        if is_url_field(name):
            fixed = normalize_url(value)
            if fixed != value:
                logger.debug(f"{path}: URL {value!r} -> {fixed!r}")
                container[key] = fixed
        elif is_color_field(name, value):
            fixed = normalize_color(name, value)
            if fixed != value:
                logger.debug(f"{path}: color {value!r} -> {fixed!r}")
                container[key] = fixed


def _fix_launcher_icon(branding: Dict[str, Any]):
    if branding.get("launcherIcon") == "custom":
        icon_url = normalize_url(branding.get("customLauncherIconUrl"))
        if icon_url is None:
            logger.debug("custom launcher icon without a usable URL, reverted to default")
            branding["launcherIcon"] = DEFAULT_LAUNCHER_ICON
        branding["customLauncherIconUrl"] = icon_url
    else:
        branding["customLauncherIconUrl"] = None


def _fix_numbers(config: Dict[str, Any]):
    for path, (low, high) in NUMERIC_BOUNDS.items():
        container, leaf = parent_of(config, path)
        if container is None or leaf not in container:
            continue
        value = container[leaf]
        if not is_number(value):
            logger.debug(f"{path}={value!r} is not a number, dropped")
            del container[leaf]
            continue
        clamped = clamp(value, low, high)
        if clamped != value:
            logger.debug(f"{path}={value!r} clamped to {clamped!r}")
            container[leaf] = clamped


def sanitize_config(config: Dict[str, Any], tier: Union[Tier, str]) -> Dict[str, Any]:
    """
    Returns a corrected deep copy of a raw widget configuration.

    Malformed colors and URLs are repaired or reset, tier-gated features are
    switched off where the tier does not allow them, required branding text
    is backfilled, enumerations and numeric fields are forced into range.
    Running it twice gives the same document as running it once.
    """
    tier = Tier.parse(tier)
    sanitized = copy.deepcopy(config)

    if not isinstance(sanitized.get("branding"), dict):
        sanitized["branding"] = {}
    branding = sanitized["branding"]

    # 1. Tier restrictions
    _apply_tier_policy(sanitized, tier)

    # 2. Branding integrity
    _fix_branding_text(branding)

    # 3. Enumerations (unknown launcher icons fall back here)
    _fix_enums(sanitized)

    # 4. Colors + URLs, anywhere in the tree
    _fix_colors_and_urls(sanitized)

    # 5. Launcher icon consistency
    _fix_launcher_icon(branding)

    # 6. Numeric bounds
    _fix_numbers(sanitized)

    return sanitized
