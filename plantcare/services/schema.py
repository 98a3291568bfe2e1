"""
Render result models as the JSON shape embedded in prompts.

The pydantic models in ``plantcare.models`` are the only definition of each
reply shape. The same model validates the reply in the parser, so renaming a
field changes the prompt and the parser together.
"""

import json
import typing
from typing import List, Literal, Type

from pydantic import BaseModel

_SCALARS = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
}

INDENT = "  "


def _is_model(tp) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def _wire_fields(model: Type[BaseModel]):
    exclude = getattr(model, "prompt_exclude", frozenset())
    for name, info in model.model_fields.items():
        if name in exclude:
            continue
        yield name, info.alias or name, info


def _render_type(tp, description: str = "", depth: int = 0, rows: int = 1) -> str:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is Literal:
        return " | ".join(json.dumps(v) for v in args)

    if origin is typing.Union:
        non_null = [a for a in args if a is not type(None)]
        rendered = " | ".join(_render_type(a, depth=depth) for a in non_null)
        return f"{rendered} | null" if len(non_null) < len(args) else rendered

    if origin in (list, List):
        item = args[0] if args else str
        if _is_model(item):
            pad = INDENT * (depth + 1)
            line = _render_inline(item)
            body = ",\n".join(f"{pad}{line}" for _ in range(rows))
            return f"[\n{body}\n{INDENT * depth}]"
        return f"{_render_type(item, depth=depth)}[]"

    if _is_model(tp):
        return _render_object(tp, depth)

    scalar = _SCALARS.get(tp, "string")
    if description:
        return json.dumps(f"{scalar} ({description})", ensure_ascii=False)
    return scalar


def _render_inline(model: Type[BaseModel]) -> str:
    parts = [f'"{alias}": {_render_type(info.annotation, info.description or "")}'
             for _, alias, info in _wire_fields(model)]
    return "{ " + ", ".join(parts) + " }"


def _render_object(model: Type[BaseModel], depth: int = 0) -> str:
    pad = INDENT * (depth + 1)
    rows = getattr(model, "prompt_list_rows", {})
    lines = []
    for name, alias, info in _wire_fields(model):
        rendered = _render_type(
            info.annotation,
            info.description or "",
            depth=depth + 1,
            rows=rows.get(name, 1),
        )
        lines.append(f'{pad}"{alias}": {rendered}')
    return "{\n" + ",\n".join(lines) + f"\n{INDENT * depth}}}"


def render_shape(model: Type[BaseModel]) -> str:
    """Return the literal JSON shape the AI must reply with for ``model``."""
    return _render_object(model)


def wire_field_names(model: Type[BaseModel]) -> List[str]:
    """All wire (alias) field names of ``model``, nested models included."""
    names = []
    for _, alias, info in _wire_fields(model):
        names.append(alias)
        tp = info.annotation
        args = typing.get_args(tp)
        nested = args[0] if typing.get_origin(tp) in (list, List) and args else tp
        if _is_model(nested):
            names.extend(wire_field_names(nested))
    return names
