# src/isorender/core/runtime/elements.py
"""
Árvore de elementos e renderização estática (lado server).

`h` e `Fragment` têm a mesma assinatura das funções do Preact injetadas no
perfil browser, de modo que o mesmo corpo de componente roda nos dois lados.

`render_to_static_markup` resolve a árvore inteira em uma string HTML:
componentes são invocados, atributos são mapeados para HTML e todo texto é
escapado. Não há marcadores de hidratação nem construções client-only.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

ATTRIBUTE_ALIASES = {"className": "class", "htmlFor": "for"}
SKIPPED_PROPS = frozenset({"children", "key", "ref"})
RAW_HTML_PROP = "dangerouslySetInnerHTML"

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class Element:
    tag: Any
    props: Dict[str, Any] = field(default_factory=dict)
    children: Tuple[Any, ...] = ()


def h(tag: Any, props: Optional[Mapping[str, Any]] = None, *children: Any) -> Element:
    return Element(tag=tag, props=dict(props or {}), children=tuple(children))


def Fragment(props: Mapping[str, Any]) -> Any:
    return props.get("children")


def component(fn: Any) -> Any:
    """Marca o export do módulo. Removido na normalização; aqui é identidade."""
    return fn


def _escape(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _style(value: Any) -> str:
    if not isinstance(value, Mapping):
        return str(value)
    rules = []
    for prop, v in value.items():
        if v is None or v is False or v == "":
            continue
        name = prop if prop.startswith("--") else _CAMEL_RE.sub("-", prop).lower()
        rules.append(f"{name}:{_number(v) if isinstance(v, (int, float)) else v}")
    return ";".join(rules)


def _attributes(props: Mapping[str, Any]) -> str:
    parts: List[str] = []
    for name, value in props.items():
        if name in SKIPPED_PROPS or name == RAW_HTML_PROP:
            continue
        if name.startswith("on") and len(name) > 2 and name[2].isupper():
            continue
        if value is None or value is False or callable(value):
            continue

        attr = ATTRIBUTE_ALIASES.get(name, name)
        if value is True:
            parts.append(f" {attr}")
            continue
        if name == "style":
            value = _style(value)
        elif isinstance(value, (int, float)):
            value = _number(value)
        parts.append(f' {attr}="{_escape(value)}"')
    return "".join(parts)


def _component_props(element: Element) -> Dict[str, Any]:
    props = dict(element.props)
    if element.children:
        props["children"] = element.children[0] if len(element.children) == 1 else list(element.children)
    return props


def _render(node: Any, out: List[str]) -> None:
    if node is None or isinstance(node, bool):
        return
    if isinstance(node, str):
        out.append(_escape(node))
        return
    if isinstance(node, (int, float)):
        out.append(_number(node))
        return
    if isinstance(node, (list, tuple)):
        for child in node:
            _render(child, out)
        return
    if not isinstance(node, Element):
        raise TypeError(f"Objects of type {type(node).__name__} are not valid as a child")

    if callable(node.tag):
        _render(node.tag(_component_props(node)), out)
        return

    tag = str(node.tag)
    out.append(f"<{tag}{_attributes(node.props)}")
    if tag in VOID_ELEMENTS:
        out.append("/>")
        return
    out.append(">")

    raw = node.props.get(RAW_HTML_PROP)
    if isinstance(raw, Mapping) and raw.get("__html") is not None:
        out.append(str(raw["__html"]))
    else:
        _render(node.children or node.props.get("children"), out)
    out.append(f"</{tag}>")


def render_to_static_markup(node: Any) -> str:
    """Renderiza uma árvore de elementos em HTML estático."""
    out: List[str] = []
    _render(node, out)
    return "".join(out)
