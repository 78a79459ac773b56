"""Composable request options.

An option is a plain callable that receives the :class:`PendingRequest`
being built and mutates it in place. Options run in the order they are
passed to :meth:`nps_client.api.Client.new_request`; a later option can
overwrite what an earlier one set. Options report failure by raising an
:class:`~nps_client.api.errors.OptionError`.
"""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import httpx
import pydantic
from pydantic_core import PydanticSerializationError

from .errors import QueryEncodingError, RequestBodyError


@dataclass
class PendingRequest:
    """A request under construction, handed to each option."""

    method: str
    url: httpx.URL
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def build(self) -> httpx.Request:
        """Freeze the pending request into an :class:`httpx.Request`."""
        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            extensions=self.extensions,
        )


Option: TypeAlias = Callable[[PendingRequest], None]


class QueryOptions(pydantic.BaseModel):
    """Base class for declarative query parameter sets.

    Subclasses declare their parameters as fields; the wire name of each
    parameter is the field alias. Fields left as None are omitted, lists
    are sent comma-separated and booleans as ``true``/``false``.
    """

    model_config = pydantic.ConfigDict(populate_by_name=True)

    def to_query(self) -> dict[str, str]:
        """Render the set fields as a query parameter mapping."""
        params: dict[str, str] = {}
        for name, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, bool):
                params[name] = "true" if value else "false"
            elif isinstance(value, list | tuple):
                params[name] = ",".join(str(v) for v in value)
            else:
                params[name] = str(value)
        return params


def _replace_query(url: httpx.URL, params: Mapping[str, str]) -> httpx.URL:
    # an empty mapping drops the query string, including the "?"
    return url.copy_with(params=sorted(params.items()))


def with_json_body(body: Any) -> Option:
    """Send ``body`` serialized as JSON.

    Pydantic models are serialized by alias; anything else goes through
    :func:`json.dumps`. Replaces any body set earlier.

    Raises:
        RequestBodyError: When applied, if ``body`` is not JSON serializable.
    """

    def apply(request: PendingRequest) -> None:
        try:
            if isinstance(body, pydantic.BaseModel):
                content = body.model_dump_json(by_alias=True).encode("utf-8")
            else:
                content = json.dumps(body, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError, PydanticSerializationError) as exc:
            msg = f"unable to marshal request body: {exc}"
            raise RequestBodyError(msg) from exc

        request.content = content
        request.headers["Content-Type"] = "application/json"

    return apply


def with_query(query: Mapping[str, str]) -> Option:
    """Use the key/value pairs of ``query`` as the raw query string.

    Any existing query string is replaced, not merged.
    """

    def apply(request: PendingRequest) -> None:
        request.url = _replace_query(request.url, query)

    return apply


def with_options(opts: QueryOptions | None) -> Option:
    """Use the fields of ``opts`` as the query string.

    ``None`` leaves the request untouched. Otherwise any existing query
    string is replaced by the parameters ``opts`` declares.

    Raises:
        QueryEncodingError: When applied, if ``opts`` is not a
            :class:`QueryOptions` or its fields cannot be rendered.
    """

    def apply(request: PendingRequest) -> None:
        if opts is None:
            return
        if not isinstance(opts, QueryOptions):
            msg = f"query options must be a QueryOptions model, got {type(opts).__name__}"
            raise QueryEncodingError(msg)

        try:
            params = opts.to_query()
        except PydanticSerializationError as exc:
            msg = f"unable to encode query options: {exc}"
            raise QueryEncodingError(msg) from exc

        request.url = _replace_query(request.url, params)

    return apply
