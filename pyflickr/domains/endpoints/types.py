"""Schemas for the endpoint table."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pyflickr.core.constants import METHOD_PREFIX


class ArgumentTransform(str, Enum):
    """How a caller-supplied argument is rendered before normalization."""

    CSV = "csv"
    TAGS = "tags"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"


class ResultShape(str, Enum):
    """What an endpoint call returns to the caller."""

    RAW = "raw"
    UNWRAP = "unwrap"
    BOOL = "bool"


class EndpointParam(BaseModel):
    """One declared argument of an endpoint."""

    name: str = Field(..., description="Python argument name")
    wire: Optional[str] = Field(None, description="Wire parameter name; defaults to name")
    required: bool = False
    transform: Optional[ArgumentTransform] = None

    @property
    def wire_name(self) -> str:
        return self.wire or self.name


class EndpointSpec(BaseModel):
    """A single row of the endpoint table."""

    name: str = Field(..., description="Method name without the flickr. prefix")
    params: List[EndpointParam] = Field(default_factory=list)
    returns: ResultShape = ResultShape.RAW
    unwrap: Optional[str] = Field(None, description="Dotted path into the response")
    mutates: bool = Field(False, description="Mutating calls bypass the cache")
    requires_auth: bool = False
    extra_params: bool = Field(
        False, description="Accept undeclared keyword arguments and send them as-is"
    )
    not_found_codes: List[int] = Field(
        default_factory=list, description="API error codes reinterpreted as None"
    )

    @field_validator("name")
    @classmethod
    def strip_prefix(cls, value: str) -> str:
        if value.startswith(METHOD_PREFIX):
            return value[len(METHOD_PREFIX):]
        return value

    @model_validator(mode="after")
    def validate_shape(self) -> "EndpointSpec":
        if self.returns == ResultShape.UNWRAP and not self.unwrap:
            raise ValueError(f"Endpoint {self.name} returns 'unwrap' but declares no path")
        seen = set()
        for param in self.params:
            if param.name in seen:
                raise ValueError(f"Endpoint {self.name} declares '{param.name}' twice")
            seen.add(param.name)
        return self

    @property
    def method(self) -> str:
        """Fully namespaced API method."""
        return f"{METHOD_PREFIX}{self.name}"

    @property
    def group(self) -> str:
        """Method group, e.g. ``photos.geo`` for ``photos.geo.getLocation``."""
        return self.name.rsplit(".", 1)[0]

    @property
    def short_name(self) -> str:
        """Method name within its group, e.g. ``getLocation``."""
        return self.name.rsplit(".", 1)[-1]
