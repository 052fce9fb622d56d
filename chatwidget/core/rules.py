"""Field-level rules shared by the sanitizer and the validator.

Both components read the same tables so that everything the sanitizer
produces is accepted by the validator.
"""

import re
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple

from chatwidget.core.color_math import HEX3_RE, HEX6_RE, expand_hex

MISSING = object()

# --- 1. Text ---
REQUIRED_BRANDING_TEXT: Dict[str, str] = {
    "companyName": "My Company",
    "welcomeText": "How can we help?",
    "firstMessage": "Hello! How can I assist you today?",
}

TEXT_LIMITS: Dict[str, int] = {
    "branding.companyName": 100,
    "branding.welcomeText": 200,
    "branding.firstMessage": 500,
    "branding.responseTimeText": 100,
    "branding.inputPlaceholder": 100,
}

# Keys whose values are prose, never colors, even when they start with "#"
FREE_TEXT_KEYS: FrozenSet[str] = frozenset({
    "companyName",
    "welcomeText",
    "firstMessage",
    "responseTimeText",
    "inputPlaceholder",
    "greeting",
    "placeholder",
    "disclaimer",
    "label",
    "prompt",
    "prompts",
    "starterPrompts",
    "icon",
    "route",
    "fontFamily",
    "fontFamilyMono",
    "customFontCss",
    "customJs",
})

# --- 2. Colors ---
DEFAULT_COLOR = "#000000"
COLOR_DEFAULTS: Dict[str, str] = {
    "accentColor": "#0066FF",
    "primaryColor": "#0066FF",
    "backgroundColor": "#FFFFFF",
    "surfaceBackgroundColor": "#FFFFFF",
    "surfaceForegroundColor": "#F8FAFC",
    "userMessageTextColor": "#FFFFFF",
    "textColor": "#111827",
    "customTextColor": "#111827",
}


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(HEX6_RE.match(value))


def is_color_field(key: str, value: Any) -> bool:
    if not isinstance(value, str) or key in FREE_TEXT_KEYS:
        return False
    if value.startswith("#"):
        return True
    return key.endswith("Color") and value != ""


def normalize_color(key: str, value: str) -> str:
    if HEX3_RE.match(value):
        return expand_hex(value)
    if HEX6_RE.match(value):
        return value
    return COLOR_DEFAULTS.get(key, DEFAULT_COLOR)


# --- 3. URLs ---
SECURE_URL_RE = re.compile(r"^https://[^\s/?#]+[^\s]*$")


def is_url_field(key: str) -> bool:
    return key.endswith("Url")


def is_secure_url(value: Any) -> bool:
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return False
    if SECURE_URL_RE.match(value):
        return True
    # Local development hosts are allowed on any scheme
    return "localhost" in value


def normalize_url(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if candidate.startswith("http://"):
        candidate = "https://" + candidate[len("http://"):]
    if is_secure_url(candidate):
        return candidate
    return None


# --- 4. Numbers (dotted path -> inclusive bounds) ---
NUMERIC_BOUNDS: Dict[str, Tuple[float, float]] = {
    "fontSize": (12, 20),
    "theme.typography.fontSize": (12, 20),
    "style.fontSize": (12, 20),
    "theme.cornerRadius": (0, 20),
    "style.cornerRadius": (0, 20),
    "theme.position.offsetX": (0, 500),
    "theme.position.offsetY": (0, 500),
    "advancedStyling.messages.messageSpacing": (0, 50),
    "advancedStyling.messages.bubblePadding": (5, 30),
    "behavior.autoOpenDelay": (0, 60),
    "connection.timeoutSeconds": (10, 60),
    "features.attachments.maxFileSizeMB": (1, 50),
    "maxFileSize": (1, 50 * 1024 * 1024),
    "maxFileCount": (1, 20),
    "accentLevel": (1, 3),
    "tintHue": (0, 360),
    "grayHue": (0, 360),
    "tintLevel": (0, 100),
    "grayTint": (0, 100),
    "shadeLevel": (-50, 50),
    "grayShade": (-50, 50),
}


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def clamp(value, low, high):
    return max(low, min(high, value))


# --- 5. Enumerations (dotted path -> allowed values, replacement or None to drop) ---
WIDGET_POSITIONS = frozenset({"bottom-right", "bottom-left", "top-right", "top-left"})
LAUNCHER_ICONS = frozenset({"chat", "support", "bot", "custom"})
DEFAULT_LAUNCHER_ICON = "chat"

ENUM_FIELDS: Dict[str, Tuple[FrozenSet[str], Optional[str]]] = {
    "themeMode": (frozenset({"light", "dark"}), None),
    "style.theme": (frozenset({"light", "dark", "auto"}), None),
    "theme.mode": (frozenset({"light", "dark", "auto"}), None),
    "radius": (frozenset({"none", "small", "medium", "large", "pill"}), None),
    "density": (frozenset({"compact", "normal", "spacious"}), None),
    "style.position": (WIDGET_POSITIONS, None),
    "theme.position.position": (WIDGET_POSITIONS, None),
    "branding.launcherIcon": (LAUNCHER_ICONS, DEFAULT_LAUNCHER_ICON),
}


def is_allowed(path: str, value: Any) -> bool:
    allowed, _ = ENUM_FIELDS[path]
    return isinstance(value, str) and value in allowed


# --- 6. Path helpers ---
def lookup(document: Dict[str, Any], path: str):
    """Returns the value at a dotted path, or MISSING."""
    node: Any = document
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return MISSING
        node = node[part]
    return node


def parent_of(document: Dict[str, Any], path: str):
    """Returns (container dict, leaf key) for a dotted path, or (None, leaf)."""
    *parents, leaf = path.split(".")
    node: Any = document
    for part in parents:
        if not isinstance(node, dict):
            return None, leaf
        node = node.get(part)
    if not isinstance(node, dict):
        return None, leaf
    return node, leaf


def iter_fields(node: Any, path: str = "", name: str = "") -> Iterator[Tuple[Any, Any, str, str]]:
    """Yields (container, key, field name, dotted path) for every entry in the tree.

    Dict entries yield their own key as the field name. Plain strings held in
    a list yield the list index as key and inherit the name of the field that
    holds the list, so `palette: ["#abc"]` is checked as `palette`. A child is
    read after its entry is yielded, so callers may replace values in place.
    """
    if isinstance(node, dict):
        for key in list(node):
            if not isinstance(key, str):
                continue
            child_path = f"{path}.{key}" if path else key
            yield node, key, key, child_path
            yield from iter_fields(node.get(key), child_path, key)
    elif isinstance(node, list):
        for index, item in enumerate(node):
            item_path = f"{path}[{index}]"
            if isinstance(item, str):
                yield node, index, name, item_path
            else:
                yield from iter_fields(item, item_path, name)
