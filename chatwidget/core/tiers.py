from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


# --- 1. Define the Tiers ---
class Tier(str, Enum):
    BASIC = "basic"     # Entry plan: "Powered by" footer is mandatory
    PRO = "pro"         # White-label, advanced styling
    AGENCY = "agency"   # Everything in Pro, unlimited widgets

    @classmethod
    def parse(cls, value) -> "Tier":
        """Accepts a Tier, its value, or the legacy 'free' plan name."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in TIER_ALIASES:
            return TIER_ALIASES[normalized]
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown tier: {value!r}. Must be 'basic', 'pro', or 'agency'") from None


# Billing used to call the entry plan "free"
TIER_ALIASES: Dict[str, Tier] = {"free": Tier.BASIC}

TIER_ORDER = [Tier.BASIC, Tier.PRO, Tier.AGENCY]


# --- 2. Define the Capabilities ---
class Capability(str, Enum):
    REMOVE_BRANDING = "remove_branding"
    ADVANCED_STYLING = "advanced_styling"
    EMAIL_TRANSCRIPT = "email_transcript"
    RATING_PROMPT = "rating_prompt"


class TierPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    branding_forced_on: bool
    advanced_styling_allowed: bool
    email_transcript_allowed: bool
    rating_prompt_allowed: bool
    widget_limit: Optional[int] = None  # None = unlimited


# --- 3. The Policy Table (Tier -> What it may enable) ---
TIER_POLICY: Dict[Tier, TierPolicy] = {

    # Basic: branding stays on, no premium features
    Tier.BASIC: TierPolicy(
        branding_forced_on=True,
        advanced_styling_allowed=False,
        email_transcript_allowed=False,
        rating_prompt_allowed=False,
        widget_limit=1,
    ),

    # Pro: white-label and premium features
    Tier.PRO: TierPolicy(
        branding_forced_on=False,
        advanced_styling_allowed=True,
        email_transcript_allowed=True,
        rating_prompt_allowed=True,
        widget_limit=3,
    ),

    # Agency: same capabilities as Pro, no widget cap
    Tier.AGENCY: TierPolicy(
        branding_forced_on=False,
        advanced_styling_allowed=True,
        email_transcript_allowed=True,
        rating_prompt_allowed=True,
        widget_limit=None,
    ),
}


def policy_for(tier) -> TierPolicy:
    return TIER_POLICY[Tier.parse(tier)]


def check_capability(tier, capability: Capability) -> bool:
    """Helper function to check if a tier may enable a capability."""
    policy = policy_for(tier)
    if capability == Capability.REMOVE_BRANDING:
        return not policy.branding_forced_on
    if capability == Capability.ADVANCED_STYLING:
        return policy.advanced_styling_allowed
    if capability == Capability.EMAIL_TRANSCRIPT:
        return policy.email_transcript_allowed
    if capability == Capability.RATING_PROMPT:
        return policy.rating_prompt_allowed
    return False


def widget_limit(tier) -> Optional[int]:
    return policy_for(tier).widget_limit
