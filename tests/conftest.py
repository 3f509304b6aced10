"""Pytest configuration and fixtures."""

import pytest

from axecore.commons.script_provider import AxeBuilderOptions
from axecore.config import reset_settings

AXE_SOURCE = "/* axe-core */ window.axe = window.axe || {};"


class StaticScriptProvider:
    """Script provider returning a fixed axe source."""

    def __init__(self, script: str = AXE_SOURCE) -> None:
        self.script = script
        self.calls = 0

    def get_script(self) -> str:
        self.calls += 1
        return self.script


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the user's environment and cache out of tests."""
    for name in (
        "AXECORE_AXE_VERSION",
        "AXECORE_AXE_SOURCE_URL",
        "AXECORE_AXE_SCRIPT_PATH",
        "AXECORE_LEGACY_MODE",
        "AXECORE_FRAME_TIMEOUT",
        "AXECORE_BRANDING_APPLICATION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AXECORE_CACHE_PATH", str(tmp_path / "cache"))
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def script_provider():
    """Provide a script provider that never touches the network."""
    return StaticScriptProvider()


@pytest.fixture
def builder_options(script_provider):
    """Builder options wired to the static script provider."""
    return AxeBuilderOptions(script_provider=script_provider)


@pytest.fixture
def sample_report():
    """A trimmed axe report as returned by axe.finishRun."""
    return {
        "testEngine": {"name": "axe-core", "version": "4.10.2"},
        "testRunner": {"name": "axe"},
        "testEnvironment": {
            "userAgent": "Mozilla/5.0 HeadlessChrome",
            "windowWidth": 1280,
            "windowHeight": 720,
            "orientationAngle": 0,
            "orientationType": "landscape-primary",
        },
        "timestamp": "2024-05-01T10:20:30.000Z",
        "url": "http://localhost/basic.html",
        "toolOptions": {"reporter": "v1"},
        "violations": [
            {
                "id": "color-contrast",
                "impact": "serious",
                "tags": ["cat.color", "wcag2aa", "wcag143"],
                "description": "Ensures the contrast between foreground and background colors",
                "help": "Elements must meet minimum color contrast ratio thresholds",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.10/color-contrast",
                "nodes": [
                    {
                        "html": '<p class="low">Low contrast</p>',
                        "impact": "serious",
                        "target": [".low"],
                        "any": [
                            {
                                "id": "color-contrast",
                                "impact": "serious",
                                "message": "Element has insufficient color contrast",
                                "data": {"contrastRatio": 1.5},
                                "relatedNodes": [{"html": "<body>", "target": ["body"]}],
                            }
                        ],
                        "all": [],
                        "none": [],
                        "failureSummary": "Fix any of the following: ...",
                    }
                ],
            },
            {
                "id": "aria-roles",
                "impact": "critical",
                "tags": ["cat.aria", "wcag2a", "wcag412"],
                "description": "Ensures all elements with a role attribute use a valid value",
                "help": "ARIA roles used must conform to valid values",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.10/aria-roles",
                "nodes": [
                    {
                        "html": '<div id="div-fail" role="foo"></div>',
                        "impact": "critical",
                        "target": ["#ifr-foo", "#div-fail"],
                        "any": [],
                        "all": [],
                        "none": [],
                    },
                    {
                        "html": '<div role="bar"></div>',
                        "impact": "critical",
                        "target": [["#shadow-host", "div[role=bar]"]],
                        "any": [],
                        "all": [],
                        "none": [],
                    },
                ],
            },
        ],
        "passes": [
            {
                "id": "region",
                "impact": None,
                "tags": ["cat.keyboard", "best-practice"],
                "description": "Ensures all page content is contained by landmarks",
                "help": "All page content should be contained by landmarks",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.10/region",
                "nodes": [{"html": "<html>", "target": ["html"]}],
            }
        ],
        "incomplete": [],
        "inapplicable": [
            {
                "id": "audio-caption",
                "impact": None,
                "tags": ["cat.time-and-media", "wcag2a"],
                "description": "Ensures <audio> elements have captions",
                "help": "<audio> elements must have a captions track",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.10/audio-caption",
                "nodes": [],
            }
        ],
    }
