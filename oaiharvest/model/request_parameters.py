from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class RequestParameters:
    """One OAI-PMH call: endpoint, verb and the verb's query parameters.

    Instances never change. ``with_param`` hands back a copy with a single
    key added or overwritten, so the original stays reusable (the pagination
    loop relies on this when it swaps in each new resumption token).
    """

    endpoint_url: str
    verb: str
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def with_param(self, key: str, value: str) -> "RequestParameters":
        updated = dict(self.params)
        updated[key] = value
        return RequestParameters(self.endpoint_url, self.verb, updated)

    def get(self, key: str) -> Optional[str]:
        return self.params.get(key)

    def query_params(self) -> Dict[str, str]:
        """HTTP query parameters: the verb merged with the parameter mapping."""
        query = {"verb": self.verb}
        query.update(self.params)
        return query
