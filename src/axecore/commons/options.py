"""
Run option and context models

Pydantic models for the options and context objects handed to axe.
Serialization uses axe's camelCase keys and omits unset values, so axe
falls back to its own defaults for anything the caller did not set.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_serializer


class ResultType(str, Enum):
    """Result groups axe can report."""

    VIOLATIONS = "violations"
    INCOMPLETE = "incomplete"
    INAPPLICABLE = "inapplicable"
    PASSES = "passes"


class RunOnlyOptions(BaseModel):
    """Limit a run to a set of tags or rule IDs."""

    type: Literal["tag", "tags", "rule", "rules"] = Field(
        description="Whether values are tags or rule IDs"
    )
    values: list[str] = Field(default_factory=list, description="Tags or rule IDs to run")


class RuleOptions(BaseModel):
    """Per-rule configuration."""

    enabled: bool | None = Field(None, description="Whether the rule runs")
    selector: str | None = Field(None, description="Override the rule's element selector")


class AxeRunOptions(BaseModel):
    """Options passed to axe.run / axe.runPartial / axe.finishRun."""

    run_only: RunOnlyOptions | None = Field(None, alias="runOnly")
    rules: dict[str, RuleOptions] | None = None
    reporter: str | None = None
    result_types: set[ResultType] | None = Field(
        None,
        alias="resultTypes",
        description="Limit which groups keep full node lists",
    )
    selectors: bool | None = None
    ancestry: bool | None = None
    xpath: bool | None = None
    absolute_paths: bool | None = Field(None, alias="absolutePaths")
    iframes: bool | None = Field(None, description="Whether to descend into frames")
    element_ref: bool | None = Field(None, alias="elementRef")
    frame_wait_time: int | None = Field(None, alias="frameWaitTime")
    preload: bool | None = None
    performance_timer: bool | None = Field(None, alias="performanceTimer")
    ping_wait_time: int | None = Field(None, alias="pingWaitTime")

    model_config = {"populate_by_name": True}

    @field_serializer("result_types")
    def _serialize_result_types(self, value: set[ResultType] | None) -> list[str] | None:
        if value is None:
            return None
        return sorted(result_type.value for result_type in value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the mapping axe expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize to a compact JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class AxeRunContext(BaseModel):
    """
    Selectors to include in or exclude from a scan.

    Each entry is a list of selectors that identifies one element; entries
    with more than one selector walk into frames, e.g.
    ``["#parent-iframe", "#element-inside-iframe"]``. Without any entries the
    whole document is scanned.
    """

    include: list[list[str]] | None = None
    exclude: list[list[str]] | None = None

    def has_data(self) -> bool:
        return bool(self.include) or bool(self.exclude)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class AxeFrameContext(BaseModel):
    """One frame reported by axe.utils.getFrameContexts."""

    selector: Any = Field(alias="frameSelector", description="Selector path to the frame")
    context: Any = Field(alias="frameContext", description="Context to scan inside the frame")

    model_config = {"populate_by_name": True}
