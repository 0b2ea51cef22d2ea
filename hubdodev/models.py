"""Data models for requests and responses."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


@dataclass
class QueryParam:
    name: str
    value: str

    def __post_init__(self):
        self.name = "" if self.name is None else str(self.name)
        self.value = "" if self.value is None else str(self.value)

    @classmethod
    def coerce(cls, param: Union["QueryParam", Mapping[str, Any]]) -> "QueryParam":
        """Accept either a QueryParam or a {"name": ..., "value": ...} mapping."""
        if isinstance(param, cls):
            return param
        return cls(name=param.get("name"), value=param.get("value"))

    @property
    def sendable(self) -> bool:
        """Only parameters with both a name and a value go on the wire."""
        return bool(self.name) and bool(self.value)


@dataclass
class RequestOptions:
    method: str = "GET"
    path: str = "/"
    headers: List[str] = field(default_factory=list)
    params: List[QueryParam] = field(default_factory=list)
    # JSON-serialisable payload; None means no body is sent
    body: Optional[Any] = None

    def header_dict(self) -> Dict[str, str]:
        """Turn "Name: value" header lines into a mapping (later lines win)."""
        headers = {}
        for line in self.headers:
            name, _, value = line.partition(":")
            name = name.strip()
            if name:
                headers[name] = value.strip()
        return headers


@dataclass
class ResponseEnvelope:
    body: Optional[Any]
    http_code: int
    info: Optional[Dict[str, Any]] = None

    def get(self, name: str, default: Any = None) -> Any:
        """Read a top-level field of the JSON body, tolerating absent or non-object bodies."""
        if isinstance(self.body, dict):
            return self.body.get(name, default)
        return default

    def has_field(self, name: str) -> bool:
        return isinstance(self.body, dict) and self.body.get(name) is not None

    def to_dict(self) -> dict:
        data = {"body": self.body, "httpCode": self.http_code}
        if self.info is not None:
            data["info"] = self.info
        return data
