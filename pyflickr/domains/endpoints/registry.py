"""Endpoint registry.

Loads the static endpoint table shipped with the package and turns a call
like ``call("photos.getInfo", "123")`` into wire parameters, a pipeline send,
and a shaped result.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import TypeAdapter

from pyflickr.core.config.enums import ResponseStatus
from pyflickr.core.constants import METHOD_PREFIX, STATUS_FIELD
from pyflickr.core.exceptions import ApiError, AuthStateError
from pyflickr.core.logging import logger
from pyflickr.domains.endpoints.transforms import apply_transform
from pyflickr.domains.endpoints.types import EndpointSpec, ResultShape

SendFn = Callable[..., Dict[str, Any]]
AuthCheck = Callable[[], bool]

_TABLE_ADAPTER = TypeAdapter(List[EndpointSpec])


def resolve_path(data: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None if any segment is missing."""
    current = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]
    return current


class EndpointRegistry:
    """Lookup and invocation over a table of ``EndpointSpec`` rows."""

    def __init__(self, specs: Iterable[EndpointSpec]) -> None:
        self._specs: Dict[str, EndpointSpec] = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"Duplicate endpoint in table: {spec.name}")
            self._specs[spec.name] = spec

    @classmethod
    def from_json(cls, raw: str) -> "EndpointRegistry":
        return cls(_TABLE_ADAPTER.validate_python(json.loads(raw)))

    def __contains__(self, name: str) -> bool:
        return self._key(name) in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    @staticmethod
    def _key(name: str) -> str:
        if name.startswith(METHOD_PREFIX):
            return name[len(METHOD_PREFIX):]
        return name

    def get(self, name: str) -> EndpointSpec:
        """Look up an endpoint by name, with or without the ``flickr.`` prefix.

        Raises:
            KeyError: If the endpoint is not in the table.
        """
        try:
            return self._specs[self._key(name)]
        except KeyError:
            raise KeyError(f"Unknown Flickr endpoint: {name}") from None

    def groups(self) -> List[str]:
        """Every method group in the table, sorted."""
        return sorted({spec.group for spec in self._specs.values()})

    def in_group(self, group: str) -> List[EndpointSpec]:
        return [spec for spec in self._specs.values() if spec.group == group]

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def bind(self, spec: EndpointSpec, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Map positional and keyword arguments to wire parameters.

        Raises:
            TypeError: On too many positional arguments, unknown or duplicate
                keywords, or a missing required argument.
        """
        if len(args) > len(spec.params):
            raise TypeError(
                f"{spec.name}() takes {len(spec.params)} positional arguments "
                f"but {len(args)} were given"
            )

        values: Dict[str, Any] = {}
        for param, value in zip(spec.params, args):
            values[param.name] = value

        declared = {param.name for param in spec.params}
        extras: Dict[str, Any] = {}
        for name, value in kwargs.items():
            if name in values:
                raise TypeError(f"{spec.name}() got multiple values for argument '{name}'")
            if name in declared:
                values[name] = value
            elif spec.extra_params:
                extras[name] = value
            else:
                raise TypeError(f"{spec.name}() got an unexpected keyword argument '{name}'")

        wire: Dict[str, Any] = {}
        for param in spec.params:
            value = values.get(param.name)
            if value is None:
                if param.required:
                    raise TypeError(f"{spec.name}() missing required argument: '{param.name}'")
                continue
            if param.transform is not None:
                value = apply_transform(param.transform, value)
            wire[param.wire_name] = value
        wire.update(extras)
        return wire

    def shape(self, spec: EndpointSpec, envelope: Dict[str, Any]) -> Any:
        """Reduce a normalized envelope to what the endpoint returns."""
        if spec.returns == ResultShape.BOOL:
            return envelope.get(STATUS_FIELD) == ResponseStatus.OK.value
        if spec.returns == ResultShape.UNWRAP:
            return resolve_path(envelope, spec.unwrap or "")
        return envelope

    def call(
        self,
        send: SendFn,
        name: str,
        *args: Any,
        is_authorized: Optional[AuthCheck] = None,
        **kwargs: Any,
    ) -> Any:
        """Invoke an endpoint through ``send`` and shape its result.

        ``send`` has the pipeline's signature: ``send(method, params, force_no_cache)``.
        With ``is_authorized`` given, endpoints flagged ``requires_auth`` are
        refused before any request while it returns False.
        API errors listed in the endpoint's ``not_found_codes`` become None;
        every other error propagates.

        Raises:
            AuthStateError: If the endpoint needs an access token and none is held.
        """
        spec = self.get(name)
        params = self.bind(spec, args, kwargs)
        if spec.requires_auth and is_authorized is not None and not is_authorized():
            raise AuthStateError(
                f"{spec.method} requires an access token; complete the OAuth handshake first"
            )
        try:
            envelope = send(spec.method, params, force_no_cache=spec.mutates)
        except ApiError as e:
            if e.code in spec.not_found_codes:
                logger.with_context(method=spec.method, code=e.code).debug(
                    f"Treating API error as empty result: {e.message}"
                )
                return None
            raise
        return self.shape(spec, envelope)


@lru_cache(maxsize=1)
def default_registry() -> EndpointRegistry:
    """The endpoint table bundled with the package, loaded once."""
    raw = resources.files("pyflickr.domains.endpoints").joinpath("endpoints.json").read_text(
        encoding="utf-8"
    )
    return EndpointRegistry.from_json(raw)


def snake_to_camel(name: str) -> str:
    """``get_info`` → ``getInfo``; camelCase names pass through."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class MethodGroup:
    """Attribute access over one method group of the table.

    ``client.group("photos").get_info("123")`` calls ``flickr.photos.getInfo``.
    """

    def __init__(
        self,
        registry: EndpointRegistry,
        send: SendFn,
        group: str,
        is_authorized: Optional[AuthCheck] = None,
    ) -> None:
        self._registry = registry
        self._send = send
        self._group = group
        self._is_authorized = is_authorized

    def __getattr__(self, attr: str) -> Callable[..., Any]:
        if attr.startswith("_"):
            raise AttributeError(attr)
        name = f"{self._group}.{snake_to_camel(attr)}"
        if name not in self._registry:
            raise AttributeError(f"Flickr method group '{self._group}' has no method '{attr}'")

        def _invoke(*args: Any, **kwargs: Any) -> Any:
            return self._registry.call(
                self._send, name, *args, is_authorized=self._is_authorized, **kwargs
            )

        _invoke.__name__ = attr
        return _invoke

    def __dir__(self) -> List[str]:
        return sorted(spec.short_name for spec in self._registry.in_group(self._group))

    def __repr__(self) -> str:
        return f"MethodGroup({self._group!r})"
