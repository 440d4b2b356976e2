# tests/core/compiler/test_normalize_module.py
"""
Testes da normalização compartilhada de fontes de componentes.

Os testes asseguram que:
- o corpo do módulo é envolvido na fábrica com o export retornado
- o decorador @component e imports __future__ são removidos
- referências de partial são canonizadas para a chave de registry
- erros de sintaxe e exports ausentes/ambíguos viram CompilationError
"""

import ast

import pytest

try:
    from isorender.core.compiler.normalize import FACTORY_NAME, normalize_module
    from isorender.core.exceptions import CompilationError
except Exception as e:  # noqa: BLE001
    normalize_module = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing normalization module. Implement:\n"
            "- src/isorender/core/compiler/normalize.py (normalize_module)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_factory_wraps_module_and_returns_export(card_source):
    _require_imports()
    module = normalize_module("molecules-card", card_source)

    assert module.export == "Card"
    assert module.partials == ("atoms-heading",)

    tree = ast.parse(module.factory_source)
    (factory,) = tree.body
    assert isinstance(factory, ast.FunctionDef)
    assert factory.name == FACTORY_NAME
    assert [a.arg for a in factory.args.args] == ["import_partial", "h", "Fragment"]
    assert isinstance(factory.body[-1], ast.Return)
    assert factory.body[-1].value.id == "Card"
    assert "@component" not in module.factory_source


def test_future_imports_dropped_and_paths_canonicalized():
    _require_imports()
    source = (
        "from __future__ import annotations\n"
        "Heading = import_partial('./atoms-heading.py')\n"
        "@component\n"
        "def Page(props):\n"
        "    return h(Heading, props)\n"
    )
    module = normalize_module("pages-home", source)

    assert "__future__" not in module.factory_source
    assert "import_partial('atoms-heading')" in module.factory_source
    assert module.partials == ("atoms-heading",)


def test_syntax_error_carries_location():
    _require_imports()
    with pytest.raises(CompilationError) as exc:
        normalize_module("atoms-broken", "@component\ndef Broken(props:\n    return 1\n")

    details = exc.value.details
    assert details["module"] == "atoms-broken"
    assert details["diagnostics"][0].startswith("atoms-broken:")


def test_compile_only_errors_are_reported():
    _require_imports()
    with pytest.raises(CompilationError):
        normalize_module("atoms-bad", "return 1\n@component\ndef X(props):\n    return None\n")


@pytest.mark.parametrize(
    "source",
    [
        "def Plain(props):\n    return None\n",
        "@component\ndef A(props):\n    return None\n@component\ndef B(props):\n    return None\n",
    ],
)
def test_export_must_be_unique(source):
    _require_imports()
    with pytest.raises(CompilationError) as exc:
        normalize_module("atoms-x", source)
    assert "@component" in exc.value.details["diagnostics"][0]


def test_dynamic_partial_reference_rejected():
    _require_imports()
    source = "name = 'atoms-heading'\nHeading = import_partial(name)\n@component\ndef X(props):\n    return None\n"
    with pytest.raises(CompilationError):
        normalize_module("atoms-x", source)


def test_entry_units_do_not_require_export():
    _require_imports()
    module = normalize_module("entry", "Component = import_partial('atoms-heading')\n", require_export=False)
    assert module.export is None
    assert module.factory_source.rstrip().endswith("return None")
