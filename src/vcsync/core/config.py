from __future__ import annotations

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from vcsync.constants import KNOWN_FEATURE_GATES
from vcsync.core.errors import ConfigError

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class FeatureGates:
    """Read-only snapshot of the enabled feature gates."""

    enabled_gates: frozenset[str] = frozenset()

    def enabled(self, name: str) -> bool:
        return name in self.enabled_gates

    @classmethod
    def of(cls, *names: str) -> "FeatureGates":
        unknown = sorted(set(names) - KNOWN_FEATURE_GATES)
        if unknown:
            raise ConfigError(f"unknown feature gates: {', '.join(unknown)}", {"gates": unknown})
        return cls(frozenset(names))

    @classmethod
    def parse(cls, text: str) -> "FeatureGates":
        """Parse the ``Name=true,Other=false`` form used by ``--feature-gates``."""
        enabled: set[str] = set()
        for item in (text or "").split(","):
            item = item.strip()
            if not item:
                continue
            name, sep, raw = item.partition("=")
            name = name.strip()
            value = raw.strip().lower()
            if not sep or not name:
                raise ConfigError(f"malformed feature gate entry {item!r}", {"entry": item})
            if name not in KNOWN_FEATURE_GATES:
                raise ConfigError(f"unknown feature gate {name!r}", {"gate": name})
            if value in _TRUE:
                enabled.add(name)
            elif value in _FALSE:
                enabled.discard(name)
            else:
                raise ConfigError(f"invalid value {raw!r} for feature gate {name!r}", {"gate": name})
        return cls(frozenset(enabled))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VCSYNC_", extra="ignore")

    # Same form as the syncer's --feature-gates flag, e.g.
    # "SuperClusterPooling=true,SuperClusterServiceNetwork=false".
    feature_gates: str = ""

    log_level: str = "INFO"

    # None tries in-cluster config first and falls back to kubeconfig.
    in_cluster: bool | None = None
    kubeconfig: str | None = None

    def gates(self) -> FeatureGates:
        return FeatureGates.parse(self.feature_gates)


settings = Settings()
