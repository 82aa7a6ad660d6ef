"""Flat XML body decoder: lxml tree -> dict -> pydantic validation."""

from __future__ import annotations

import types
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from lxml import etree
from pydantic import BaseModel, TypeAdapter, ValidationError

from providers.json_decoder import describe_validation_error
from rest.errors import BodyDecodeError

T = TypeVar("T")

_SEQUENCE_ORIGINS = (list, set, frozenset, tuple)


def _local(name: str) -> str:
    return etree.QName(name).localname


def element_to_value(element: etree._Element) -> Any:
    """Map an element to plain Python data.

    Leaf elements become their stripped text (None when empty). Elements with
    children become dicts keyed by local tag name; repeated tags collect into a
    list. Attributes are added as keys unless a child already uses the name, and
    the text of a leaf that has attributes lands under ``value``.
    """
    children = [child for child in element if isinstance(child.tag, str)]
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text or None

    grouped: dict[str, list[Any]] = {}
    for child in children:
        grouped.setdefault(_local(child.tag), []).append(element_to_value(child))
    data: dict[str, Any] = {key: vals[0] if len(vals) == 1 else vals for key, vals in grouped.items()}

    for name, value in element.attrib.items():
        data.setdefault(_local(name), value)
    if not children and text:
        data.setdefault("value", text)
    return data


def _unwrap_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, types.UnionType):
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def shape_for(data: Any, tp: Any) -> Any:
    """Wrap single occurrences into lists wherever the target type expects a sequence.

    XML cannot tell a one-element list from a scalar, so the type decides.
    """
    tp = _unwrap_optional(tp)
    origin = get_origin(tp)

    if origin in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS:
        if data is None:
            return []
        items = data if isinstance(data, list) else [data]
        args = get_args(tp)
        item_tp = args[0] if args else Any
        return [shape_for(item, item_tp) for item in items]

    if isinstance(tp, type) and issubclass(tp, BaseModel) and isinstance(data, dict):
        shaped = dict(data)
        for name, field in tp.model_fields.items():
            key = field.alias or name
            if key in shaped:
                shaped[key] = shape_for(shaped[key], field.annotation)
        return shaped

    return data


class XmlBodyDecoder(Generic[T]):
    """Decodes a flat XML encoding of the same schema the JSON decoder expects."""

    def __init__(self, response_type: Any) -> None:
        self.response_type = response_type
        self._adapter: TypeAdapter[T] = TypeAdapter(response_type)

    def to_python(self, text: str) -> Any:
        # The body is already text; the bytes handed to lxml are always UTF-8,
        # whatever the document's own declaration says. External entities and
        # network lookups stay off for untrusted bodies.
        parser = etree.XMLParser(
            encoding="utf-8",
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        try:
            root = etree.fromstring(text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as exc:
            raise BodyDecodeError(f"Invalid XML: {exc}", body=text) from exc
        return element_to_value(root)

    def decode(self, text: str) -> T:
        data = shape_for(self.to_python(text), self.response_type)
        try:
            return self._adapter.validate_python(data)
        except ValidationError as exc:
            raise BodyDecodeError(describe_validation_error(exc), body=text) from exc
