from __future__ import annotations

from typing import Callable, Dict

from inf2json.core.document import Document
from inf2json.core.models import ConversionOptions
from inf2json.emit.json_writer import JsonWriter, render_value, serialize
from inf2json.emit.jsonc_writer import JsoncWriter, serialize_with_comments

SerializerFn = Callable[[Document, ConversionOptions], str]

SERIALIZERS: Dict[bool, SerializerFn] = {
    False: serialize,
    True: serialize_with_comments,
}


def serializer_for(options: ConversionOptions) -> SerializerFn:
    return SERIALIZERS[bool(options.preserve_comments)]


__all__ = [
    "JsonWriter",
    "JsoncWriter",
    "SERIALIZERS",
    "render_value",
    "serialize",
    "serialize_with_comments",
    "serializer_for",
]
