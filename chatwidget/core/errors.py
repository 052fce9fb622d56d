"""Validation issue records and the exception raised by the validation gate."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ValidationRule:
    REQUIRED = "required"
    TYPE = "type"
    RANGE = "range"
    ENUM = "enum"
    COLOR_FORMAT = "color_format"
    URL_FORMAT = "url_format"
    TIER = "tier"
    CROSS_FIELD = "cross_field"


class ValidationIssue(BaseModel):
    """One violated rule, addressed by its dotted field path."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_path: str = Field(alias="fieldPath")
    rule: str
    message: str


class ConfigValidationError(ValueError):
    """Raised when a configuration document fails the validation gate."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{i.field_path}: {i.message}" for i in self.issues[:3])
        if len(self.issues) > 3:
            summary += f" (+{len(self.issues) - 3} more)"
        super().__init__(f"Invalid widget configuration: {summary}")

    def to_dict(self) -> List[Dict[str, Any]]:
        return [issue.model_dump(by_alias=True) for issue in self.issues]
