# src/isorender/core/compiler/normalize.py
"""
Normalização de fonte compartilhada pelos perfis server e browser.

Um componente é um módulo Python com exatamente uma função decorada com
`@component`. A normalização:

    1. faz o parse do fonte (erro de sintaxe → CompilationError)
    2. remove `from __future__ import ...`
    3. remove o decorador `@component` e memoriza o nome exportado
    4. valida e canoniza as chamadas `import_partial("<chave>")`
    5. envolve o corpo do módulo na fábrica
       `def isorender_factory(import_partial, h, Fragment): ...; return <export>`

O texto da fábrica (via `ast.unparse`) é o dialeto executável comum que cada
emissor converte para o formato do seu perfil.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import List, Optional, Tuple

from isorender.core.errors import compilation_error
from isorender.core.exceptions import CompilationError
from isorender.core.pipeline.dependencies import candidate_key


EXPORT_DECORATOR = "component"
PARTIAL_LOADER = "import_partial"
FACTORY_NAME = "isorender_factory"
FACTORY_PARAMS: Tuple[str, ...] = (PARTIAL_LOADER, "h", "Fragment")

_FACTORY_STUB = f"def {FACTORY_NAME}({', '.join(FACTORY_PARAMS)}):\n    pass\n"


@dataclass(frozen=True)
class NormalizedModule:
    """Módulo pronto para emissão: chave, export, partials usados e texto da fábrica."""
    key: str
    export: Optional[str]
    partials: Tuple[str, ...]
    factory_source: str

    @property
    def module_key(self) -> str:
        """Chave sob a qual o módulo é registrado nos bundles (mesma forma de `import_partial`)."""
        return candidate_key(self.key)


def _fail(key: str, diagnostics: List[str], message: str) -> CompilationError:
    return CompilationError.from_payload(
        compilation_error(profile="normalize", module=key, diagnostics=diagnostics, message=message)
    )


def _syntax_diagnostic(key: str, exc: SyntaxError) -> List[str]:
    lines = [f"{key}:{exc.lineno}:{exc.offset}: {exc.msg}"]
    if exc.text:
        lines.append(exc.text.rstrip("\n"))
    return lines


def _is_export_decorator(node: ast.expr) -> bool:
    if isinstance(node, ast.Name):
        return node.id == EXPORT_DECORATOR
    if isinstance(node, ast.Attribute):
        return node.attr == EXPORT_DECORATOR
    return False


class _PartialCallRewriter(ast.NodeTransformer):
    """Canoniza o argumento de `import_partial(...)` para a chave de registry."""

    def __init__(self, key: str) -> None:
        self.key = key
        self.partials: List[str] = []

    def visit_Call(self, node: ast.Call) -> ast.AST:
        self.generic_visit(node)
        if not (isinstance(node.func, ast.Name) and node.func.id == PARTIAL_LOADER):
            return node

        literal = node.args[0] if len(node.args) == 1 and not node.keywords else None
        if not (isinstance(literal, ast.Constant) and isinstance(literal.value, str)):
            raise _fail(
                self.key,
                [f"{self.key}:{node.lineno}:{node.col_offset + 1}: {PARTIAL_LOADER}() requer uma única string literal"],
                "Referência de partial dinâmica não é suportada",
            )

        canonical = candidate_key(literal.value)
        node.args = [ast.copy_location(ast.Constant(value=canonical), literal)]
        if canonical not in self.partials:
            self.partials.append(canonical)
        return node


def normalize_module(key: str, source: str, *, require_export: bool = True) -> NormalizedModule:
    """
    Normaliza o fonte de um módulo de componente.

    Args:
        key: Chave de registry do módulo (usada nos diagnósticos).
        source: Texto do módulo.
        require_export: False para unidades de entrada, que não exportam nada.

    Returns:
        NormalizedModule: Fábrica pronta para os emissores server e browser.

    Raises:
        CompilationError: Sintaxe inválida, export ausente/ambíguo ou
            `import_partial` com argumento não literal.
    """
    filename = f"<{key}>"
    try:
        tree = ast.parse(source, filename=filename)
        # erros detectados só pelo compilador (ex.: 'return' fora de função)
        compile(tree, filename, "exec")
    except SyntaxError as e:
        raise _fail(key, _syntax_diagnostic(key, e), f"Erro de sintaxe em {key}") from e

    body = [
        stmt for stmt in tree.body
        if not (isinstance(stmt, ast.ImportFrom) and stmt.module == "__future__")
    ]

    exported = [
        stmt for stmt in body
        if isinstance(stmt, ast.FunctionDef) and any(_is_export_decorator(d) for d in stmt.decorator_list)
    ]
    if require_export and len(exported) != 1:
        names = [fn.name for fn in exported]
        raise _fail(
            key,
            [f"{key}: esperado exatamente um @{EXPORT_DECORATOR}, encontrado {len(exported)} {names}"],
            "Componente sem export único",
        )

    for fn in exported:
        fn.decorator_list = [d for d in fn.decorator_list if not _is_export_decorator(d)]

    rewriter = _PartialCallRewriter(key)
    body = [rewriter.visit(stmt) for stmt in body]

    export = exported[0].name if exported else None
    returned: ast.expr = ast.Name(id=export, ctx=ast.Load()) if export else ast.Constant(value=None)

    factory = ast.parse(_FACTORY_STUB).body[0]
    factory.body = body + [ast.Return(value=returned)]

    module = ast.Module(body=[factory], type_ignores=[])
    ast.fix_missing_locations(module)

    return NormalizedModule(
        key=key,
        export=export,
        partials=tuple(rewriter.partials),
        factory_source=ast.unparse(module),
    )
