# tests/core/compiler/test_browser_bundle.py
"""
Testes do perfil browser (PScript).

Os testes asseguram que:
- o prelúdio define o `require` de módulos
- cada módulo é registrado em `__isorender_modules__` pela sua chave
- a unidade de entrada hidrata o componente com o JSON embutido
- falhas do compilador JavaScript viram CompilationError
- o diretório transitório da unidade de entrada não sobrevive à chamada
"""

import asyncio
import tempfile
from pathlib import Path

import pytest

try:
    from isorender.core.compiler import browser
    from isorender.core.compiler.normalize import NormalizedModule, normalize_module
    from isorender.core.exceptions import CompilationError
except Exception as e:  # noqa: BLE001
    browser = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing browser profile. Implement:\n"
            "- src/isorender/core/compiler/browser.py (build_browser_bundle)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_entry_source_reads_configured_ids(settings):
    _require_imports()
    source = browser.entry_source("molecules-card", settings)

    assert 'import_partial("molecules-card")' in source
    assert f'"{settings.container_id}"' in source
    assert f'"{settings.data_element_id}"' in source
    assert "preact.hydrate" in source


def test_bundle_registers_modules_and_hydrates(card_source, heading_source, settings):
    _require_imports()
    bundle = asyncio.run(browser.build_browser_bundle(
        normalize_module("molecules-card", card_source),
        [normalize_module("atoms-heading", heading_source)],
        settings,
    ))

    assert bundle.startswith(browser.RUNTIME_PRELUDE.split("\n")[0])
    assert "__isorender_require__" in bundle
    assert 'modules["atoms-heading"]' in bundle
    assert 'modules["molecules-card"]' in bundle
    assert bundle.index('modules["atoms-heading"]') < bundle.index('modules["molecules-card"]')
    assert "hydrate" in bundle
    assert "patternJSON" in bundle


def test_transient_entry_directory_removed(settings, monkeypatch):
    _require_imports()
    created = []
    real = tempfile.TemporaryDirectory

    def tracking(*args, **kwargs):
        tmp = real(*args, **kwargs)
        created.append(Path(tmp.name))
        return tmp

    monkeypatch.setattr(browser.tempfile, "TemporaryDirectory", tracking)
    asyncio.run(browser.compile_entry_js("atoms-heading", settings))

    assert len(created) == 1
    assert not created[0].exists()


def test_pscript_failure_becomes_compilation_error(monkeypatch):
    _require_imports()

    def boom(_source):
        raise RuntimeError("unsupported construct")

    monkeypatch.setattr(browser, "py2js", boom)
    module = NormalizedModule(key="atoms-x", export="X", partials=(), factory_source="x = 1\n")

    with pytest.raises(CompilationError) as exc:
        browser.compile_module_js(module)

    assert exc.value.details["profile"] == "browser"
    assert "unsupported construct" in exc.value.details["diagnostics"][0]


def test_prelude_guards_circular_requires():
    _require_imports()
    prelude = browser.RUNTIME_PRELUDE

    assert "var loading = Object.create(null);" in prelude
    guard = prelude.index("if (loading[key])")
    assert prelude.index("return null;", guard) < prelude.index("loading[key] = true;")
    assert "delete loading[key];" in prelude


def test_modules_registered_under_canonical_key(heading_source, settings):
    _require_imports()
    bundle = asyncio.run(browser.build_browser_bundle(
        normalize_module("./atoms/heading.py", heading_source), [], settings,
    ))

    assert 'modules["atoms/heading"]' in bundle
    assert 'modules["./atoms/heading.py"]' not in bundle
