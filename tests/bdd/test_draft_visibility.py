"""Behaviour tests for draft visibility in production and preview builds.

These pytest-bdd scenarios reproduce the blog's duplicate posts about variable
sized arrays: a draft dated 2025-02-07 and the published rewrite dated
2025-04-13 share a title. Production builds must list only the published post
while preview builds list both, newest first, without merging them.

Usage
-----
Run ``pytest tests/bdd/test_draft_visibility.py -v``. The scenarios are
defined in ``features/draft_visibility.feature`` and build a temporary site
with the ``make_site`` fixture from ``tests/conftest.py``.
"""

from __future__ import annotations

import typing as typ
import warnings
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from blog_pages.site import SiteBuilder, SiteModel

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "draft_visibility.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a blog with a draft and a published post sharing a title")
def given_blog(
    make_site: typ.Callable[..., Path], vla_title: str, scenario_state: ScenarioState
) -> None:
    """Write the example site and remember the shared title."""
    scenario_state["root"] = make_site("drafts")
    scenario_state["title"] = vla_title


@when(parsers.parse("I build the site in {mode} mode"))
def when_build(mode: str, scenario_state: ScenarioState) -> None:
    """Run a build pass, recording warnings instead of emitting them."""
    with warnings.catch_warnings(record=True):
        warnings.simplefilter("always")
        scenario_state["model"] = SiteBuilder(scenario_state["root"], mode=mode).run()


def _dates_for_title(scenario_state: ScenarioState) -> list[str]:
    model: SiteModel = scenario_state["model"]
    return [
        doc.date.date().isoformat()
        for doc in model.pages
        if doc.title == scenario_state["title"] and doc.date is not None
    ]


@then("only the post dated 2025-04-13 is listed")
def then_only_published(scenario_state: ScenarioState) -> None:
    """Verify the draft is absent from the production listing."""
    dates = _dates_for_title(scenario_state)
    assert dates == ["2025-04-13"], f"expected only the published post, got {dates!r}"


@then("the posts dated 2025-04-13 and 2025-02-07 are listed in that order")
def then_both_listed(scenario_state: ScenarioState) -> None:
    """Verify preview lists both posts, newest first."""
    dates = _dates_for_title(scenario_state)
    assert dates == ["2025-04-13", "2025-02-07"], (
        f"expected both posts newest first, got {dates!r}"
    )
