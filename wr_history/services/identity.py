from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from django.conf import settings

STEAM_ID64_BASE = 76561197960265728
DEFAULT_PROFILE_URL = "https://steamcommunity.com/profiles/{steam_id64}"

_STEAM_ID64_RE = re.compile(r"^\d{16,17}$", re.ASCII)
_DIGITS_RE = re.compile(r"^\d+$", re.ASCII)


@dataclass(frozen=True)
class SteamCandidate:
    """One possible real account behind an ambiguous logged player name."""
    name: str
    steam_id64: str | None = None
    steam_id: str | None = None


@dataclass(frozen=True)
class PlayerIdentity:
    name: str
    profile_url: str | None
    candidates: list[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "profile_url": self.profile_url,
            "candidates": list(self.candidates),
        }


def normalize_steam_id64(value: str | None) -> str | None:
    if not value:
        return None
    trimmed = value.strip()
    if _STEAM_ID64_RE.match(trimmed):
        return trimmed
    return None


def parse_steam_id64(steam_id: str | None) -> str | None:
    """
    Decode any supported Steam identifier into a SteamID64 string.

    Tried in order: a bare SteamID64, a SteamID3 like ``[U:1:24691]``, a legacy
    ``STEAM_X:Y:Z``. Anything else is unresolved (``None``).
    """
    if not steam_id:
        return None
    trimmed = steam_id.strip()
    if not trimmed:
        return None

    direct = normalize_steam_id64(trimmed)
    if direct:
        return direct

    if trimmed.startswith("[U:") and trimmed.endswith("]"):
        account = trimmed[:-1].rsplit(":", 1)[-1]
        if _DIGITS_RE.match(account):
            return str(STEAM_ID64_BASE + int(account))

    if trimmed.startswith("STEAM_"):
        parts = trimmed[len("STEAM_"):].split(":")
        if len(parts) == 3 and _DIGITS_RE.match(parts[1]) and _DIGITS_RE.match(parts[2]):
            y = int(parts[1])
            z = int(parts[2])
            return str(STEAM_ID64_BASE + z * 2 + y)

    return None


def resolve_steam_id64(steam_id64: str | None = None, steam_id: str | None = None) -> str | None:
    return normalize_steam_id64(steam_id64) or parse_steam_id64(steam_id)


def build_steam_profile_url(steam_id64: str | None = None, steam_id: str | None = None) -> str | None:
    resolved = resolve_steam_id64(steam_id64, steam_id)
    if not resolved:
        return None
    template = getattr(settings, "WR_HISTORY_STEAM_PROFILE_URL", DEFAULT_PROFILE_URL)
    return template.format(steam_id64=resolved)


def parse_steam_candidates(value: str | None) -> list[SteamCandidate]:
    if not value:
        return []
    candidates: list[SteamCandidate] = []
    for entry in value.split(";"):
        parts = entry.split("|")
        name = parts[0].strip()
        if not name:
            continue
        steam_id64 = parts[1].strip() if len(parts) > 1 else ""
        steam_id = parts[2].strip() if len(parts) > 2 else ""
        candidates.append(SteamCandidate(name=name, steam_id64=steam_id64 or None, steam_id=steam_id or None))
    return candidates


def resolve_player_identity(row: Mapping[str, str]) -> PlayerIdentity:
    candidates = []
    for candidate in parse_steam_candidates(row.get("steam_candidates", "")):
        candidates.append(
            {
                "name": candidate.name,
                "steam_id64": candidate.steam_id64,
                "steam_id": candidate.steam_id,
                "profile_url": build_steam_profile_url(candidate.steam_id64, candidate.steam_id),
                "meta": candidate.steam_id64 or candidate.steam_id,
            }
        )
    return PlayerIdentity(
        name=row.get("player", ""),
        profile_url=build_steam_profile_url(row.get("steam_id64"), row.get("steam_id")),
        candidates=candidates,
    )
