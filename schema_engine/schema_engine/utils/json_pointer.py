from __future__ import annotations

from typing import Iterable, List, Optional, Union


JsonPointer = str


def escape_token(token: Union[str, int]) -> str:
    # RFC 6901: "~" -> "~0", "/" -> "~1"
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_path(base: Optional[JsonPointer], token: Union[str, int]) -> JsonPointer:
    if not base:
        return f"/{escape_token(token)}"
    return f"{base}/{escape_token(token)}"


def pointer_from_parts(parts: Iterable[Union[str, int]]) -> JsonPointer:
    """Build a pointer from raw (unescaped) tokens, e.g. a jsonschema ``absolute_path``."""
    pointer = ""
    for part in parts:
        pointer = join_path(pointer, part)
    return pointer


def split_pointer(pointer: JsonPointer) -> List[str]:
    if not pointer:
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"JSON Pointer must start with '/': {pointer!r}")
    return [unescape_token(t) for t in pointer[1:].split("/")]
