# tests/core/pipeline/test_component_types.py
"""
Testes dos tipos canônicos: escolha do fonte e nome de exibição.
"""

import pytest

try:
    from isorender.core.pipeline.types import Component, RenderOutcome, RenderStatus
except Exception as e:  # noqa: BLE001
    Component = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing pipeline types (src/isorender/core/pipeline/types.py). Import error: {_IMPORT_ERR}")


def test_template_preferred_over_extended_template():
    _require_imports()
    c = Component(key="k", source_path="k.py", template="raw", extended_template="expanded")
    assert c.source == "raw"
    assert Component(key="k", source_path="k.py", extended_template="expanded").source == "expanded"
    assert Component(key="k", source_path="k.py").source == ""


@pytest.mark.parametrize(
    "source_path, expected",
    [
        ("molecules/01-card-list.py", "Card List"),
        ("atoms/heading.py", "Heading"),
        ("atoms\\02_primary_button.py", "Primary Button"),
    ],
)
def test_display_name_from_source_path(source_path, expected):
    _require_imports()
    assert Component(key="k", source_path=source_path).display_name == expected


def test_explicit_name_wins():
    _require_imports()
    assert Component(key="k", source_path="x.py", name="Fancy").display_name == "Fancy"


def test_outcome_ok_flag():
    _require_imports()
    assert RenderOutcome(key="k", status=RenderStatus.RENDERED, html="x").ok
    assert not RenderOutcome(key="k", status=RenderStatus.FAILED, html="x").ok
