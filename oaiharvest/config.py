import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from oaiharvest.exceptions import ConfigError
from oaiharvest.model.granularity import AUTO_DETECT, DateGranularity, GranularitySetting
from oaiharvest.model.request_parameters import RequestParameters

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

DEFAULT_TIMEOUT = 60.0
DEFAULT_USER_AGENT = f"oaiharvest/{__version__}"


def _env(name: str) -> Optional[str]:
    # Blank values are treated as unset.
    raw = (os.environ.get(name) or "").strip()
    return raw or None


@dataclass(frozen=True)
class Settings:
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _env("OAI_HTTP_TIMEOUT")
        try:
            resolved_timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ConfigError(f"OAI_HTTP_TIMEOUT must be a number, got {timeout!r}") from exc
        return cls(
            timeout=resolved_timeout,
            user_agent=_env("OAI_USER_AGENT") or DEFAULT_USER_AGENT,
        )


@dataclass(frozen=True)
class Source:
    """A named repository entry from ``sources.yaml``."""

    name: str
    endpoint: str
    metadata_prefix: str = "oai_dc"
    set_spec: Optional[str] = None
    granularity: GranularitySetting = AUTO_DETECT

    def request_parameters(
        self,
        verb: str = "ListRecords",
        since: Optional[str] = None,
        until: Optional[str] = None,
    ) -> RequestParameters:
        params = {"metadataPrefix": self.metadata_prefix}
        if self.set_spec:
            params["set"] = self.set_spec
        if since:
            params["from"] = since
        if until:
            params["until"] = until
        return RequestParameters(self.endpoint, verb, params)


def _source_from_dict(entry: Dict[str, Any]) -> Source:
    name = entry.get("name")
    endpoint = entry.get("endpoint")
    if not name or not endpoint:
        raise ConfigError(f"Source entries need 'name' and 'endpoint': {entry!r}")

    granularity: GranularitySetting = AUTO_DETECT
    if entry.get("granularity"):
        try:
            granularity = DateGranularity.from_string(str(entry["granularity"]))
        except ValueError as exc:
            raise ConfigError(f"Source {name!r}: {exc}") from exc

    return Source(
        name=str(name),
        endpoint=str(endpoint),
        metadata_prefix=str(entry.get("metadata_prefix") or "oai_dc"),
        set_spec=entry.get("set"),
        granularity=granularity,
    )


def load_sources(path: Union[str, Path]) -> List[Source]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    entries = cfg.get("sources") if isinstance(cfg, dict) else None
    if not isinstance(entries, list):
        raise ConfigError(f"{path}: expected a top-level 'sources' list")

    sources = [_source_from_dict(entry or {}) for entry in entries]
    logger.info("Loaded %s OAI-PMH source(s)", len(sources), extra={"config": str(path)})
    return sources


def get_source(sources: List[Source], name: str) -> Source:
    source = next((s for s in sources if s.name == name), None)
    if source is None:
        raise ConfigError(f"Source not found: {name}")
    return source
