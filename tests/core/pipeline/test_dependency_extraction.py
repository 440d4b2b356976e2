# tests/core/pipeline/test_dependency_extraction.py
"""
Testes do extrator textual de referências a partials.

Os testes asseguram que:
- fontes sem referências produzem lista vazia (não é erro)
- referências a chaves não registradas são descartadas
- a ordem relativa das referências mantidas é preservada
- variações de caminho (`./x`, `x.py`) resolvem para a mesma chave

Limites explícitos:
    - A extração é textual: referências em comentários também casam
"""

import pytest

try:
    from isorender.core.pipeline.dependencies import candidate_key, extract_references, referenced_keys
except Exception as e:  # noqa: BLE001
    extract_references = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing dependency extractor. Implement:\n"
            "- src/isorender/core/pipeline/dependencies.py (extract_references)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_no_references_returns_empty(registry, heading_component):
    _require_imports()
    assert extract_references(heading_component, registry) == []
    assert extract_references("", registry) == []


def test_unregistered_reference_is_filtered(registry):
    _require_imports()
    source = 'Foo = import_partial("foo")\nHeading = import_partial("atoms-heading")\n'

    refs = extract_references(source, registry)

    assert refs == ['import_partial("atoms-heading")']
    assert all("foo" not in r for r in refs)


def test_each_unresolved_occurrence_is_dropped_and_order_kept(registry):
    _require_imports()
    source = (
        "A = import_partial('foo')\n"
        "B = import_partial('atoms-badge')\n"
        "C = import_partial('foo')\n"
        "D = import_partial('./atoms-heading.py')\n"
    )

    assert extract_references(source, registry) == [
        "import_partial('atoms-badge')",
        "import_partial('./atoms-heading.py')",
    ]
    assert referenced_keys(source, registry) == ["atoms-badge", "atoms-heading"]


def test_component_source_is_scanned(registry, card_component):
    _require_imports()
    assert referenced_keys(card_component, registry) == ["atoms-heading"]


def test_references_in_comments_also_match(registry):
    _require_imports()
    source = '# import_partial("atoms-badge")\n'
    assert extract_references(source, registry) == ['import_partial("atoms-badge")']


def test_multiline_call_does_not_match(registry):
    _require_imports()
    source = 'B = import_partial(\n    "atoms-badge",\n)\n'
    assert extract_references(source, registry) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("atoms-heading", "atoms-heading"),
        ("./atoms-heading", "atoms-heading"),
        ("./atoms-heading.py", "atoms-heading"),
        ("atoms/heading.py", "atoms/heading"),
    ],
)
def test_candidate_key(raw, expected):
    _require_imports()
    assert candidate_key(raw) == expected


def test_disk_only_component_read_from_source_root(tmp_path, registry):
    _require_imports()
    from isorender.core.pipeline.types import Component

    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "home.py").write_text("B = import_partial('atoms-badge')\n", encoding="utf-8")
    component = Component(key="pages-home", source_path="pages/home.py")

    assert extract_references(component, registry) == []
    assert extract_references(component, registry, source_root=tmp_path) == ["import_partial('atoms-badge')"]
    assert referenced_keys(component, registry, source_root=str(tmp_path)) == ["atoms-badge"]


def test_missing_source_file_extracts_nothing(tmp_path, registry):
    _require_imports()
    from isorender.core.pipeline.types import Component

    component = Component(key="pages-ghost", source_path="pages/ghost.py")
    assert extract_references(component, registry, source_root=tmp_path) == []
