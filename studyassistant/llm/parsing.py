import json
from typing import Any, Literal

from studyassistant.errors import MalformedGenerationOutputError

PayloadKind = Literal["array", "object"]

_BRACKETS = {"array": ("[", "]"), "object": ("{", "}")}


def _balanced_end(raw: str, start: int, open_ch: str, close_ch: str) -> int:
    """Index of the bracket closing raw[start], or -1. Brackets inside JSON strings are ignored."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(raw)):
        ch = raw[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return i
    return -1


def extract_json_payload(raw: str, kind: PayloadKind) -> Any:
    """Pull the first JSON array/object out of free-form model output.

    Tries the bracket-balanced slice starting at the first opening bracket,
    then the greedy slice up to the last closing bracket. Raises
    MalformedGenerationOutputError instead of ever returning an empty default.
    """
    open_ch, close_ch = _BRACKETS[kind]
    raw = raw or ""
    start = raw.find(open_ch)
    if start == -1:
        raise MalformedGenerationOutputError(f"No JSON {kind} found in model output")

    candidates = []
    end = _balanced_end(raw, start, open_ch, close_ch)
    if end != -1:
        candidates.append(raw[start:end + 1])
    last = raw.rfind(close_ch)
    if last > start and last != end:
        candidates.append(raw[start:last + 1])

    for chunk in candidates:
        try:
            return json.loads(chunk)
        except json.JSONDecodeError:
            continue
    raise MalformedGenerationOutputError(f"Model output did not contain a parseable JSON {kind}")
