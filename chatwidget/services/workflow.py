import logging
from typing import Any, Dict, Optional, Tuple

from chatwidget.core.settings import DEFAULT_TIER
from chatwidget.core.tiers import Tier
from chatwidget.models.runtime import RuntimeConfig
from chatwidget.services.sanitizer import sanitize_config
from chatwidget.services.theme_builder import build_variables, render_css
from chatwidget.services.translator import translate_config
from chatwidget.services.validator import ensure_valid

logger = logging.getLogger("chatwidget.workflow")

# Nested blocks superseded by the flat fields but kept for the runtime script
PRESERVED_LEGACY_BLOCKS = ("advancedStyling", "behavior")


class ConfigWorkflow:
    @staticmethod
    def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merges `source` onto `target` without touching either.
        Nested dicts merge key by key; lists and scalars are replaced.
        """
        output = dict(target)
        for key, value in source.items():
            if isinstance(value, dict):
                base = target.get(key)
                output[key] = ConfigWorkflow.deep_merge(base if isinstance(base, dict) else {}, value)
            else:
                output[key] = value
        return output

    @staticmethod
    def strip_legacy_properties(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Drops the legacy nested `theme` object (replaced by themeMode & co).
        advancedStyling and behavior stay: the runtime script still reads them.
        """
        cleaned = dict(config)
        if isinstance(cleaned.get("theme"), dict):
            del cleaned["theme"]
        return cleaned

    @staticmethod
    def process_save(existing: Dict[str, Any], updates: Dict[str, Any], tier) -> Dict[str, Any]:
        """
        Logic for 'Save' from the dashboard editor.
        """
        tier = Tier.parse(tier)

        # 1. Apply the partial update onto what is stored
        merged = ConfigWorkflow.deep_merge(existing or {}, updates or {})

        # 2. Repair + gate (raises ConfigValidationError)
        sanitized = sanitize_config(merged, tier)
        ensure_valid(sanitized, tier)

        # 3. Legacy cleanup
        document = ConfigWorkflow.strip_legacy_properties(sanitized)
        logger.info(f"Config saved for {tier.value} tier ({len(document)} top-level keys)")
        return document

    @staticmethod
    def render(
        config: Dict[str, Any],
        origin: Optional[str] = None,
        widget_key: Optional[str] = None,
        tier=None,
    ) -> Tuple[RuntimeConfig, Dict[str, str], str]:
        """
        Logic for serving a stored document to the embed script.
        The document is sanitized for the tier before it is translated.
        Returns the runtime tree, its variable map and the rendered CSS block.
        """
        sanitized = sanitize_config(config, tier or DEFAULT_TIER)
        runtime = translate_config(sanitized, origin=origin, widget_key=widget_key, tier=tier)
        variables = build_variables(runtime)
        return runtime, variables, render_css(variables)
