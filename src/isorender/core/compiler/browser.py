# src/isorender/core/compiler/browser.py
"""
Emissor do perfil browser.

Cada fábrica normalizada é compilada para JavaScript com PScript e
envolvida em uma closure que a registra em `__isorender_modules__[chave]`.
Um prelúdio fixo define `__isorender_require__`, que instancia as fábricas
sob demanda com `(require, preact.h, preact.Fragment)`.

A unidade de entrada (que importa o componente e o hidrata contra o JSON
embutido no documento) é sintetizada como fonte Python, gravada em um
arquivo transitório, relida, normalizada e compilada com a mesma
transformação. O diretório transitório é removido em qualquer caminho de
saída.
"""

from __future__ import annotations

import asyncio
import json
import re
import tempfile
from pathlib import Path
from typing import List, Sequence

from pscript import py2js

from isorender.core.config.settings import Settings
from isorender.core.errors import compilation_error
from isorender.core.exceptions import CompilationError

from .normalize import FACTORY_NAME, NormalizedModule, normalize_module


GLOBAL_ROOT = 'typeof self !== "undefined" ? self : this'

RUNTIME_PRELUDE = """\
(function (root) {
    var modules = root.__isorender_modules__ = root.__isorender_modules__ || {};
    var exports = {};
    var loading = Object.create(null);
    root.__isorender_require__ = function require(key) {
        if (Object.prototype.hasOwnProperty.call(exports, key)) {
            return exports[key];
        }
        if (loading[key]) {
            return null;
        }
        if (!Object.prototype.hasOwnProperty.call(modules, key)) {
            throw new Error("isorender: unresolved partial " + key);
        }
        loading[key] = true;
        try {
            exports[key] = modules[key](require, root.preact.h, root.preact.Fragment);
        } finally {
            delete loading[key];
        }
        return exports[key];
    };
})(%(root)s);
"""

MODULE_WRAPPER = """\
(function (root) {
    var modules = root.__isorender_modules__ = root.__isorender_modules__ || {};
    modules[%(key)s] = (function () {
%(code)s
        return %(factory)s;
    })();
})(%(root)s);
"""

ENTRY_WRAPPER = """\
(function (root) {
%(code)s
    %(factory)s(root.__isorender_require__, root.preact.h, root.preact.Fragment);
})(%(root)s);
"""

ENTRY_SOURCE = """\
Component = import_partial({key})
container = document.getElementById({container_id})
props = JSON.parse(document.getElementById({data_element_id}).textContent)
preact.hydrate(h(Component, props), container)
"""

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def _indent(code: str, prefix: str = "        ") -> str:
    return "\n".join(prefix + line if line.strip() else line for line in code.splitlines())


def compile_module_js(module: NormalizedModule) -> str:
    """Compila a fábrica de um módulo para JavaScript (PScript)."""
    try:
        return str(py2js(module.factory_source))
    except Exception as e:
        raise CompilationError.from_payload(compilation_error(
            profile="browser",
            module=module.key,
            diagnostics=[f"{module.key}: {type(e).__name__}: {e}"],
            message=f"PScript não conseguiu compilar {module.key}",
            hint="Use apenas o subconjunto de Python suportado pelo PScript no corpo do componente.",
        )) from e


def wrap_module_js(module: NormalizedModule, code: str) -> str:
    return MODULE_WRAPPER % {
        "key": json.dumps(module.module_key),
        "code": _indent(code),
        "factory": FACTORY_NAME,
        "root": GLOBAL_ROOT,
    }


def entry_source(key: str, settings: Settings) -> str:
    """Fonte Python da unidade de entrada que hidrata `key`."""
    return ENTRY_SOURCE.format(
        key=json.dumps(key),
        container_id=json.dumps(settings.container_id),
        data_element_id=json.dumps(settings.data_element_id),
    )


async def compile_entry_js(key: str, settings: Settings) -> str:
    """Sintetiza, grava, compila e descarta a unidade de entrada."""
    stem = _UNSAFE_FILENAME_RE.sub("_", key) or "component"
    with tempfile.TemporaryDirectory(prefix="isorender-entry-") as tmp:
        entry_path = Path(tmp) / f"{stem}.entry.py"
        await asyncio.to_thread(entry_path.write_text, entry_source(key, settings), "utf-8")
        text = await asyncio.to_thread(entry_path.read_text, "utf-8")
        normalized = normalize_module(f"{key}.entry", text, require_export=False)
        code = await asyncio.to_thread(compile_module_js, normalized)

    return ENTRY_WRAPPER % {
        "code": _indent(code, "    "),
        "factory": FACTORY_NAME,
        "root": GLOBAL_ROOT,
    }


async def build_browser_bundle(
    entry: NormalizedModule,
    partials: Sequence[NormalizedModule],
    settings: Settings,
) -> str:
    """Prelúdio + módulos (partials antes do componente) + unidade de entrada."""
    chunks: List[str] = [RUNTIME_PRELUDE % {"root": GLOBAL_ROOT}]
    for module in [*partials, entry]:
        code = await asyncio.to_thread(compile_module_js, module)
        chunks.append(wrap_module_js(module, code))
    chunks.append(await compile_entry_js(entry.key, settings))
    return "\n".join(chunks)
