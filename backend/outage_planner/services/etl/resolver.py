"""Resolve free-text work center / branch names and transformer numbers.

Names are matched by case-insensitive containment in either direction and the
first candidate in registry order wins, so "เมือง" matches "สาขาเมือง" as well
as "เมืองใหม่" if that comes first. Branch lists are fetched once per work
center per import run through ``BranchCache``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol, Sequence, TypeVar

from outage_planner.core.logging import logger
from outage_planner.schemas.reference import BranchOut, TransformerOut, WorkCenterOut

T = TypeVar("T")


class ReferenceSource(Protocol):
    async def list_work_centers(self) -> list[WorkCenterOut]: ...

    async def list_branches(self, work_center_id: int) -> list[BranchOut]: ...

    async def search_transformers(self, text: str) -> list[TransformerOut]: ...


def match_by_name(text: str, candidates: Iterable[T], key: Callable[[T], str]) -> T | None:
    needle = text.strip().lower()
    if not needle:
        return None
    for c in candidates:
        name = (key(c) or "").strip().lower()
        if not name:
            continue
        if needle in name or name in needle:
            return c
    return None


@dataclass
class BranchCache:
    source: ReferenceSource
    _by_work_center: dict[int, list[BranchOut]] = field(default_factory=dict)
    fetches: int = 0

    async def branches_for(self, work_center_id: int) -> list[BranchOut]:
        if work_center_id not in self._by_work_center:
            self.fetches += 1
            self._by_work_center[work_center_id] = list(await self.source.list_branches(work_center_id))
        return self._by_work_center[work_center_id]


# -----------------------------
# Transformer lookup result
# -----------------------------
@dataclass(frozen=True)
class TransformerFound:
    location: str


@dataclass(frozen=True)
class TransformerNotFound:
    pass


@dataclass(frozen=True)
class LookupUnavailable:
    reason: str


TransformerLookup = TransformerFound | TransformerNotFound | LookupUnavailable


def clean_transformer_number(raw: str) -> str:
    # template dropdowns export "TX001 - หน้าตลาด"; keep the number only
    s = raw.strip()
    if " - " in s:
        return s.split(" - ")[0].strip()
    return s


async def lookup_transformer(source: ReferenceSource, number: str) -> TransformerLookup:
    try:
        results = await source.search_transformers(number)
    except Exception as e:
        logger.warning("transformer_lookup_failed", transformer_number=number, error=str(e))
        return LookupUnavailable(reason=str(e))
    if not results:
        return TransformerNotFound()
    return TransformerFound(location=(results[0].gis_details or "").strip())


def resolve_work_center(name: str, work_centers: Sequence[WorkCenterOut]) -> WorkCenterOut | None:
    return match_by_name(name, work_centers, key=lambda wc: wc.name)


async def resolve_branch(name: str, work_center_id: int, cache: BranchCache) -> BranchOut | None:
    branches = await cache.branches_for(work_center_id)
    return match_by_name(name, branches, key=lambda b: b.short_name)
