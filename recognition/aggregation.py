"""
Vote Aggregation & Ranking
==========================

Pure functions over an in-memory list of NominationRecord objects:
- Global leaderboard (nominees ranked by total recognitions)
- Category champions (top nominee per award category)
- Top entities by a raw field value (nominee engagement chart)
- Category distribution with percentage share
- Headline stats for the analytics screen

Every function recomputes from scratch for the list it is given. Nothing
here touches the database or the network.

Ordering policy:
- All rankings sort by descending count with Python's stable sort, so
  entries with equal counts keep the order in which their first record was
  encountered in the input list. The input list is newest-first, which means
  a tie goes to the nominee whose most recent record appears earliest.
"""

from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence
import logging

from .catalog import AwardCatalog, Category, FALLBACK_CATEGORY_ID
from .records import AggregatedNominee, NominationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityCount:
    value: str
    count: int


@dataclass(frozen=True)
class CategoryShare:
    category_id: str
    title: str
    count: int
    percentage: int


@dataclass(frozen=True)
class CategoryChampion:
    category: Category
    champion: AggregatedNominee


@dataclass(frozen=True)
class HeadlineStats:
    leader: str
    leader_count: int
    category: Category
    location: str
    location_count: int
    total: int


def normalize_nominee_key(name: str) -> str:
    """Case-fold and trim a nominee name so case variants merge."""
    return name.strip().casefold()


def _group_by_nominee(records: Iterable[NominationRecord]) -> "OrderedDict[str, AggregatedNominee]":
    groups: "OrderedDict[str, AggregatedNominee]" = OrderedDict()

    for record in records:
        key = normalize_nominee_key(record.nominee_name)
        entry = groups.get(key)
        if entry is None:
            entry = AggregatedNominee(
                key=key,
                nominee_name=record.nominee_name,
                nominee_department=record.nominee_department,
                nominee_location=record.nominee_location,
            )
            groups[key] = entry
        entry.count += 1
        entry.category_votes[record.category_id] = entry.category_votes.get(record.category_id, 0) + 1

    return groups


def compute_global_leaderboard(records: Sequence[NominationRecord]) -> List[AggregatedNominee]:
    """
    Rank nominees by total recognition count.

    Records are grouped by normalized nominee name. Ties keep first-seen
    order (see module docstring).

    Args:
        records: Snapshot of nomination records

    Returns:
        List of AggregatedNominee sorted by descending count
    """
    groups = _group_by_nominee(records)
    return sorted(groups.values(), key=lambda entry: entry.count, reverse=True)


def compute_category_champions(
    records: Sequence[NominationRecord],
    categories: Sequence[Category],
) -> List[CategoryChampion]:
    """
    Find the top nominee in each category.

    Categories are visited in their declared order, which is also the order
    of the result. Categories without any record are left out entirely.

    Args:
        records: Snapshot of nomination records
        categories: Category list from the award catalog

    Returns:
        List of CategoryChampion, one per category that has records
    """
    champions = []

    for category in categories:
        in_category = [r for r in records if r.category_id == category.id]
        if not in_category:
            continue
        groups = _group_by_nominee(in_category)
        # max() returns the first maximal entry, matching the stable-sort tie-break
        champion = max(groups.values(), key=lambda entry: entry.count)
        champions.append(CategoryChampion(category=category, champion=champion))

    return champions


def compute_top_entities(
    records: Sequence[NominationRecord],
    field: str,
    limit: Optional[int] = None,
) -> List[EntityCount]:
    """
    Count records by the raw value of one field.

    Unlike the leaderboard, values are not normalized: "Sarah Chen" and
    "sarah chen" are separate entries here.

    Args:
        records: Snapshot of nomination records
        field: Attribute name on NominationRecord (e.g. 'nominee_name')
        limit: Keep only the first `limit` entries; None keeps all

    Returns:
        List of EntityCount sorted by descending count
    """
    counts: Dict[str, int] = {}
    for record in records:
        value = getattr(record, field)
        counts[value] = counts.get(value, 0) + 1

    ranked = sorted(
        (EntityCount(value=value, count=count) for value, count in counts.items()),
        key=lambda item: item.count,
        reverse=True,
    )
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def _percentage(count: int, total: int) -> int:
    if not total:
        return 0
    share = Decimal(count * 100) / Decimal(total)
    return int(share.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def compute_category_distribution(
    records: Sequence[NominationRecord],
    catalog: AwardCatalog,
) -> List[CategoryShare]:
    """
    Category counts with each category's share of all records, in percent.

    Rows are grouped by resolved title, so every id missing from the catalog
    lands in a single "Service" row. `category_id` is the first id seen for
    that title.
    """
    total = len(records)
    groups: "OrderedDict[str, List]" = OrderedDict()
    for item in compute_top_entities(records, 'category_id'):
        title = catalog.category_title(item.value)
        if title not in groups:
            groups[title] = [item.value, 0]
        groups[title][1] += item.count

    ranked = sorted(groups.items(), key=lambda entry: entry[1][1], reverse=True)
    return [
        CategoryShare(
            category_id=category_id,
            title=title,
            count=count,
            percentage=_percentage(count, total),
        )
        for title, (category_id, count) in ranked
    ]


def compute_headline_stats(
    records: Sequence[NominationRecord],
    catalog: AwardCatalog,
) -> Optional[HeadlineStats]:
    """
    Summarize the leading nominee, category and location.

    The leader is the top of the normalized leaderboard, so case variants
    of a name count together (the engagement chart counts raw names).

    Args:
        records: Snapshot of nomination records
        catalog: Award catalog used to resolve the top category

    Returns:
        HeadlineStats, or None when there are no records
    """
    if not records:
        return None

    leader = compute_global_leaderboard(records)[0]

    top_categories = compute_top_entities(records, 'category_id', limit=1)
    top_category_id = top_categories[0].value if top_categories else FALLBACK_CATEGORY_ID
    category = catalog.get_category(top_category_id)
    if category is None:
        logger.warning(f"Top category {top_category_id} is not in the catalog")
        category = Category(id=top_category_id, title='Excellence', description='', icon='bi-award')

    top_location = compute_top_entities(records, 'nominee_location', limit=1)[0]

    return HeadlineStats(
        leader=leader.nominee_name,
        leader_count=leader.count,
        category=category,
        location=top_location.value,
        location_count=top_location.count,
        total=len(records),
    )


def build_summary_dataset(records: Sequence[NominationRecord], catalog: AwardCatalog) -> str:
    """One 'Nominee: ..., Category: ...' line per record, for AI summaries."""
    return '\n'.join(
        f"Nominee: {r.nominee_name}, Category: {catalog.category_title(r.category_id, default='Unknown')}"
        for r in records
    )
