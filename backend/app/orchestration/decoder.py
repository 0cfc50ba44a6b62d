"""Structured output decoder - final model text to a typed user list.

Tolerates the deviations generative models commonly introduce:
1. Markdown code fences around the payload (optionally language-tagged)
2. A single-field wrapper object whose value is the array, e.g. {"items": [...]}
3. Extra fields on each element

Anything else is rejected with OutputDecodingError carrying the raw text.
"""

import json
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from backend.app.models.directory import User
from backend.app.orchestration.errors import OutputDecodingError

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")

_USER_LIST = TypeAdapter(list[User])


def strip_markdown_fence(text: str) -> str:
    """Remove a leading/trailing triple-backtick fence if present."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_OPEN.sub("", stripped, count=1)
        stripped = _FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def _unwrap(data: Any, raw_text: str) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if len(data) != 1:
            raise OutputDecodingError(
                f"Expected an array or a single-field wrapper object, got object with "
                f"{len(data)} fields",
                raw_text,
            )
        (value,) = data.values()
        if not isinstance(value, list):
            raise OutputDecodingError("Wrapper object field is not an array", raw_text)
        return value
    raise OutputDecodingError(f"Expected a JSON array, got {type(data).__name__}", raw_text)


def decode(raw_text: str) -> list[User]:
    """Parse final model text into users, preserving emitted order.

    Raises:
        OutputDecodingError: Text is not JSON, not an accepted shape, or an
            element does not map onto User
    """
    text = strip_markdown_fence(raw_text or "")
    if not text:
        raise OutputDecodingError("Model returned an empty response", raw_text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise OutputDecodingError(f"Response is not valid JSON ({e.msg})", raw_text) from e

    items = _unwrap(data, raw_text)

    try:
        return _USER_LIST.validate_python(items)
    except ValidationError as e:
        raise OutputDecodingError(
            f"Elements do not match the user shape ({e.error_count()} error(s))", raw_text
        ) from e


def encode(users: list[User], field: str = "items") -> str:
    """Serialize users into the wrapper-object shape the model is asked to emit."""
    return json.dumps({field: [u.model_dump(mode="json", by_alias=True) for u in users]})


def format_instructions() -> str:
    """Prompt fragment describing the expected final answer shape."""
    schema = json.dumps(User.model_json_schema(by_alias=True), indent=2)
    example = encode(
        [User(user_id=1, name="Jane Doe", email="jane@example.com", team_id=1, org_id=10)]
    )
    return (
        "Your final response should be in JSON format.\n"
        "The data structure for the JSON should be an object with a single field containing "
        "an array of User objects.\n"
        f"For example: {example}\n"
        "The array elements should adhere to this JSON Schema:\n"
        f"```\n{schema}\n```\n"
        'If no user matches, respond with {"items": []}.\n'
        "Do not include markdown code blocks or any explanations, only provide a RFC8259 "
        "compliant JSON response following this format without deviation."
    )
