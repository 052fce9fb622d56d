from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class RuntimeModel(BaseModel):
    """Base for the runtime tree: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ColorScheme:
    LIGHT = "light"
    DARK = "dark"


# --- Branding / Style ---
class BrandingBlock(RuntimeModel):
    company_name: str
    welcome_text: str
    first_message: str
    logo_url: Optional[str] = None
    branding_enabled: bool = True
    launcher_icon: str = "chat"
    custom_launcher_icon_url: Optional[str] = None


class StyleBlock(RuntimeModel):
    primary_color: str
    background_color: str
    text_color: str
    font_family: str
    font_size: Number
    corner_radius: Number
    position: str = "bottom-right"


# --- Theme ---
class ColorTriple(RuntimeModel):
    hue: Number
    tint: Number
    shade: Number = 0


class AccentColor(RuntimeModel):
    primary: str
    level: int = 1


class SurfaceColor(RuntimeModel):
    background: str
    foreground: str


class UserMessageColor(RuntimeModel):
    text: str
    background: str


class ColorBlock(RuntimeModel):
    accent: Optional[AccentColor] = None
    grayscale: Optional[ColorTriple] = None
    surface: Optional[SurfaceColor] = None
    user_message: Optional[UserMessageColor] = None
    icon: Optional[str] = None
    text: Optional[str] = None


class FontSource(RuntimeModel):
    family: str
    src: str


class TypographyBlock(RuntimeModel):
    font_family: str
    base_size: Number
    font_family_mono: Optional[str] = None
    font_sources: Optional[List[FontSource]] = None


class ThemeBlock(RuntimeModel):
    color_scheme: str = ColorScheme.LIGHT
    radius: str = "medium"
    density: str = "normal"
    color: ColorBlock = Field(default_factory=ColorBlock)
    typography: Optional[TypographyBlock] = None


# --- Start screen / Composer ---
class StarterPrompt(RuntimeModel):
    label: str
    prompt: str
    icon: Optional[str] = None


class StartScreenBlock(RuntimeModel):
    greeting: Optional[str] = None
    prompts: List[StarterPrompt] = []


class AttachmentsBlock(RuntimeModel):
    enabled: bool = True
    max_size: Number
    max_count: Number
    accept: List[str]


class ComposerBlock(RuntimeModel):
    placeholder: str
    disclaimer: Optional[str] = None
    attachments: Optional[AttachmentsBlock] = None


# --- Features / Connection / License ---
class FeaturesBlock(RuntimeModel):
    file_attachments_enabled: bool = False
    allowed_extensions: List[str] = []
    max_file_size_kb: Number = Field(default=5120, alias="maxFileSizeKB")


class ConnectionBlock(RuntimeModel):
    webhook_url: str = ""
    relay_endpoint: str


class LicenseBlock(RuntimeModel):
    key: str
    active: bool = True
    plan: str


class RuntimeConfig(RuntimeModel):
    """The canonical tree the embed script renders from. Derived, never stored."""

    widget_id: Optional[str] = None
    license: Optional[LicenseBlock] = None
    branding: BrandingBlock
    style: StyleBlock
    theme: ThemeBlock
    start_screen: Optional[StartScreenBlock] = None
    composer: Optional[ComposerBlock] = None
    features: FeaturesBlock = Field(default_factory=FeaturesBlock)
    connection: ConnectionBlock
    advanced_styling: Optional[Dict[str, Any]] = None
    behavior: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
