"""
Axe result models

Pydantic models for the report axe-core produces. Field names follow Python
conventions and accept axe's camelCase keys through aliases.
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator


class AxeResultTarget(BaseModel):
    """
    One frame level of a node target.

    Axe reports a plain selector for light DOM nodes and a list of
    selectors when the node sits inside one or more shadow roots.
    """

    selector: str | None = None
    fragments: list[str] | None = Field(None, description="Shadow DOM selector path")

    @model_validator(mode="before")
    @classmethod
    def _from_axe(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"selector": data}
        if isinstance(data, list):
            return {"fragments": [str(part) for part in data]}
        return data

    def __str__(self) -> str:
        if self.selector is not None:
            return self.selector
        return "[" + ", ".join(json.dumps(part) for part in self.fragments or []) + "]"


class AxeResultRelatedNode(BaseModel):
    """A node related to a check result."""

    html: str | None = None
    target: list[AxeResultTarget] = Field(default_factory=list)


class AxeResultCheck(BaseModel):
    """The outcome of a single check within a rule."""

    id: str
    impact: str | None = None
    message: str | None = None
    data: Any = None
    related_nodes: list[AxeResultRelatedNode] = Field(default_factory=list, alias="relatedNodes")

    model_config = {"populate_by_name": True}


class AxeResultNode(BaseModel):
    """An element a rule was evaluated against."""

    html: str | None = None
    impact: str | None = None
    target: list[AxeResultTarget] | None = None
    xpath: list[AxeResultTarget] | None = None
    ancestry: list[AxeResultTarget] | None = None
    any: list[AxeResultCheck] = Field(default_factory=list)
    all: list[AxeResultCheck] = Field(default_factory=list)
    none: list[AxeResultCheck] = Field(default_factory=list)
    failure_summary: str | None = Field(None, alias="failureSummary")

    model_config = {"populate_by_name": True}


class AxeResultItem(BaseModel):
    """A rule and every node it produced a result for."""

    id: str
    impact: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    help: str | None = None
    help_url: str | None = Field(None, alias="helpUrl")
    nodes: list[AxeResultNode] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class AxeTestEnvironment(BaseModel):
    """Browser environment the scan ran in."""

    user_agent: str | None = Field(None, alias="userAgent")
    window_width: int | None = Field(None, alias="windowWidth")
    window_height: int | None = Field(None, alias="windowHeight")
    orientation_angle: int | None = Field(None, alias="orientationAngle")
    orientation_type: str | None = Field(None, alias="orientationType")

    model_config = {"populate_by_name": True}


class AxeTestRunner(BaseModel):
    name: str | None = None


class AxeRuleMetadata(BaseModel):
    """Metadata for one rule, as returned by axe.getRules."""

    rule_id: str = Field(alias="ruleId")
    description: str | None = None
    help: str | None = None
    help_url: str | None = Field(None, alias="helpUrl")
    tags: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class AxeResult(BaseModel):
    """Typed view of an axe report."""

    violations: list[AxeResultItem] | None = None
    passes: list[AxeResultItem] | None = None
    inapplicable: list[AxeResultItem] | None = None
    incomplete: list[AxeResultItem] | None = None
    timestamp: datetime | None = None
    url: str | None = None
    error: str | None = None
    test_engine_name: str | None = None
    test_engine_version: str | None = None
    test_environment: AxeTestEnvironment | None = None
    test_runner: AxeTestRunner | None = None
    tool_options: Any = None
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    @classmethod
    def from_raw(cls, result: dict[str, Any]) -> AxeResult:
        """Build a result from the mapping axe returned."""
        test_engine = result.get("testEngine") or {}
        error = result.get("error")
        return cls(
            violations=result.get("violations"),
            passes=result.get("passes"),
            inapplicable=result.get("inapplicable"),
            incomplete=result.get("incomplete"),
            timestamp=result.get("timestamp"),
            url=result.get("url"),
            error=None if error is None else str(error),
            test_engine_name=test_engine.get("name"),
            test_engine_version=test_engine.get("version"),
            test_environment=result.get("testEnvironment"),
            test_runner=result.get("testRunner"),
            tool_options=result.get("toolOptions"),
            raw=result,
        )

    def violation_count(self) -> int:
        """Number of violated rules."""
        return len(self.violations or [])

    def summary(self) -> dict[str, Any]:
        """Counts per result group plus violation counts per impact."""
        impacts = Counter(item.impact or "unknown" for item in self.violations or [])
        return {
            "url": self.url,
            "violations": len(self.violations or []),
            "violation_nodes": sum(len(item.nodes) for item in self.violations or []),
            "passes": len(self.passes or []),
            "incomplete": len(self.incomplete or []),
            "inapplicable": len(self.inapplicable or []),
            "impacts": dict(impacts),
            "error": self.error,
        }
