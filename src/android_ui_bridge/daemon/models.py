"""Pydantic request models for bridge endpoints.

Parameters arrive as query strings; each endpoint validates them into one of
these frozen models before any component is invoked.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError, field_validator
from starlette.datastructures import ImmutableMultiDict

from android_ui_bridge.actions.executor import DEFAULT_SWIPE_MS
from android_ui_bridge.errors import missing_param_error

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _query_int(value: Any) -> Any:
    # Signed base-10 digits within 32 bits; "5.0", " 5", "1_000" and "" are rejected.
    if not isinstance(value, str):
        return value
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    number = int(value)
    if not INT32_MIN <= number <= INT32_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def _duration_or_default(value: Any) -> Any:
    try:
        return _query_int(value)
    except ValueError:
        return DEFAULT_SWIPE_MS


QueryInt = Annotated[int, BeforeValidator(_query_int)]
Duration = Annotated[int, BeforeValidator(_duration_or_default)]


class QueryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


ModelT = TypeVar("ModelT", bound=QueryRequest)


class ClickRequest(QueryRequest):
    text: str

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("text must not be blank")
        return text


class TapRequest(QueryRequest):
    x: QueryInt
    y: QueryInt


class SwipeRequest(QueryRequest):
    x1: QueryInt
    y1: QueryInt
    x2: QueryInt
    y2: QueryInt
    dur: Duration = DEFAULT_SWIPE_MS  # unusable values fall back to the default


class KeyRequest(QueryRequest):
    name: str | None = None


def _first_values(params: Mapping[str, str]) -> dict[str, str]:
    # A repeated parameter counts by its first occurrence.
    if isinstance(params, ImmutableMultiDict):
        return {key: params.getlist(key)[0] for key in params.keys()}
    return dict(params)


def parse_query(model: type[ModelT], params: Mapping[str, str], message: str) -> ModelT:
    """Validate query parameters into a request model.

    Raises:
        BridgeError: With ``message`` if a required parameter is missing or malformed
    """
    try:
        return model.model_validate(_first_values(params))
    except ValidationError as err:
        fields = sorted({str(error["loc"][0]) for error in err.errors() if error["loc"]})
        raise missing_param_error(message, fields) from err
