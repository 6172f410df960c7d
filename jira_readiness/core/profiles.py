"""Load readiness search profiles from YAML.

Example ``profiles.yaml``::

    instance:
      url: https://issues.example.com
    profiles:
      - id: storage
        name: Storage epics
        jql: project = STOR AND type = Epic AND fixVersion in unreleasedVersions()
        components:
          include: [Core, CSI]
          exclude: [Docs]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .config import JIRA_DEFAULT_SERVER, PROFILES_FILE

_CACHE: dict[Path, ProfilesConfig] = {}


class ProfileConfigError(ValueError):
    """Raised when the profiles file exists but has the wrong structure."""


@dataclass(slots=True)
class SearchProfile:
    id: str
    jql: str
    name: str = ""
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(slots=True)
class ProfilesConfig:
    url: str = JIRA_DEFAULT_SERVER
    profiles: list[SearchProfile] = field(default_factory=list)

    def find_profile(self, profile_id: str) -> SearchProfile | None:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None


def _str_list(value, where: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProfileConfigError(f"{where} must be a list")
    return [str(v) for v in value]


def parse_profiles(data: dict | None) -> ProfilesConfig:
    data = data or {}
    if not isinstance(data, dict):
        raise ProfileConfigError("profiles file must contain a mapping")
    instance = data.get("instance") or {}
    if not isinstance(instance, dict):
        raise ProfileConfigError("instance must be a mapping")
    profiles: list[SearchProfile] = []
    for idx, item in enumerate(data.get("profiles") or []):
        if not isinstance(item, dict):
            raise ProfileConfigError(f"profile #{idx} must be a mapping")
        profile_id = item.get("id")
        jql = item.get("jql")
        if not profile_id or not jql:
            raise ProfileConfigError(f"profile #{idx} requires 'id' and 'jql'")
        components = item.get("components") or {}
        if not isinstance(components, dict):
            raise ProfileConfigError(f"profile '{profile_id}' components must be a mapping")
        profiles.append(
            SearchProfile(
                id=str(profile_id),
                jql=str(jql),
                name=str(item.get("name") or ""),
                include=_str_list(components.get("include"), f"profile '{profile_id}' include"),
                exclude=_str_list(components.get("exclude"), f"profile '{profile_id}' exclude"),
            )
        )
    return ProfilesConfig(url=instance.get("url") or JIRA_DEFAULT_SERVER, profiles=profiles)


def load_profiles(path: str | Path | None = None, *, reload: bool = False) -> ProfilesConfig:
    """Read profiles from ``path`` (defaults to profiles.yaml at the repo root).

    A missing file yields an empty configuration; results are cached per path.
    """
    yaml_path = Path(path or Path(__file__).resolve().parents[2] / PROFILES_FILE)
    if not reload and yaml_path in _CACHE:
        return _CACHE[yaml_path]
    if not yaml_path.exists():
        config = ProfilesConfig()
    else:
        try:
            data = yaml.safe_load(yaml_path.read_text())
        except yaml.YAMLError as exc:
            raise ProfileConfigError(f"invalid YAML in {yaml_path}: {exc}") from exc
        config = parse_profiles(data)
    _CACHE[yaml_path] = config
    return config
