"""
Reconciles the free-text industry tags stored on prospect records with the
canonical Industry table.

Tags are JSON lists of ``{"id", "name", "status"?}`` items. Items created
from the registration forms carry a client-generated id (above
ADHOC_ID_FLOOR) or ``status == "new"`` until an administrator promotes or
merges them.
"""
import logging
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from app.workspace.prospects.models import (
    BuyerCompanyOverview,
    BuyerTargetPreference,
    SellerCompanyOverview,
)

from .models import Industry
from .similarity import suggest

logger = logging.getLogger(__name__)

ADHOC_ID_FLOOR = 1_000_000
NEW_STATUS = "new"

TAG_COLUMNS = (
    (SellerCompanyOverview, "industry_ops"),
    (BuyerCompanyOverview, "main_industry_operations"),
    (BuyerCompanyOverview, "company_industry"),
    (BuyerTargetPreference, "b_ind_prefs"),
)


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _name_key(value) -> str:
    return str(value or "").strip().lower()


def _named_items(value) -> List[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict) and str(item.get("name") or "").strip()]


def _rows(model, column):
    return model.objects.only("id", "updated_at", column).order_by("id")


def is_adhoc(item: dict, canonical_ids) -> bool:
    item_id = _as_int(item.get("id"))
    if not item_id or item_id in canonical_ids:
        return False
    return item_id > ADHOC_ID_FLOOR or item.get("status") == NEW_STATUS


def _dedupe(items: list) -> list:
    seen = set()
    result = []
    for item in items:
        if isinstance(item, dict):
            key = (str(item.get("id")), item.get("name"))
            if key in seen:
                continue
            seen.add(key)
        result.append(item)
    return result


def rewrite_tags(rewrite_item: Callable[[dict], Optional[dict]]) -> int:
    """
    Applies ``rewrite_item`` to every tag item; it returns the replacement
    item or None to keep the original. Returns the number of records saved
    (one per changed column).
    """
    updated = 0
    for model, column in TAG_COLUMNS:
        for record in _rows(model, column):
            items = getattr(record, column)
            if not isinstance(items, list):
                continue

            changed = False
            rewritten = []
            for item in items:
                replacement = rewrite_item(item) if isinstance(item, dict) else None
                if replacement is not None:
                    item = replacement
                    changed = True
                rewritten.append(item)

            if changed:
                setattr(record, column, _dedupe(rewritten))
                record.save(update_fields=[column, "updated_at"])
                updated += 1
    return updated


# ------------------------------------------------------------------
# Reads
# ------------------------------------------------------------------
def usage_counts(industry_ids: Iterable[int]) -> Dict[int, int]:
    ids = set(industry_ids)
    counts = Counter({industry_id: 0 for industry_id in ids})
    for model, column in TAG_COLUMNS:
        for record in _rows(model, column):
            for item in getattr(record, column) or []:
                if isinstance(item, dict) and _as_int(item.get("id")) in ids:
                    counts[_as_int(item.get("id"))] += 1
    return dict(counts)


def find_adhoc() -> List[dict]:
    """Ad-hoc names with occurrence counts and canonical suggestions, most used first."""
    canonical = list(Industry.objects.all())
    canonical_ids = {industry.id for industry in canonical}
    active = [industry for industry in canonical if industry.status]

    counts = Counter()
    for model, column in TAG_COLUMNS:
        for record in _rows(model, column):
            for item in _named_items(getattr(record, column)):
                if is_adhoc(item, canonical_ids):
                    counts[item["name"].strip()] += 1

    ordered = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0].lower()))
    return [
        {"name": name, "count": count, "suggestions": suggest(name, active)}
        for name, count in ordered
    ]


# ------------------------------------------------------------------
# Writes (callers open the transaction)
# ------------------------------------------------------------------
def replace_adhoc(name: str, industry: Industry) -> int:
    """Points every ad-hoc or orphaned item named ``name`` at ``industry``."""
    target = _name_key(name)
    canonical_ids = set(Industry.objects.values_list("id", flat=True))

    def rewrite(item):
        if _name_key(item.get("name")) != target:
            return None
        orphan = _as_int(item.get("id")) not in canonical_ids
        if not (orphan or is_adhoc(item, canonical_ids)):
            return None
        replaced = {key: value for key, value in item.items() if key != "status"}
        replaced.update(id=industry.id, name=industry.name)
        return replaced

    updated = rewrite_tags(rewrite)
    logger.info("Replaced ad-hoc industry %r with %s (#%s) on %s records", name, industry.name, industry.id, updated)
    return updated


def promote(name: str) -> Tuple[Industry, str, int]:
    """Returns (industry, "promoted" | "merged", records updated)."""
    name = name.strip()
    existing = Industry.objects.filter(name__iexact=name).first()
    if existing is not None:
        return existing, "merged", replace_adhoc(name, existing)

    industry = Industry.objects.create(name=name, status=True)
    return industry, "promoted", replace_adhoc(name, industry)


def rename_adhoc(old_name: str, new_name: str) -> int:
    source = _name_key(old_name)
    new_name = new_name.strip()

    def rewrite(item):
        if _name_key(item.get("name")) != source:
            return None
        return {**item, "name": new_name}

    return rewrite_tags(rewrite)


def cascade_rename(industry: Industry) -> int:
    """Copies a canonical rename into every item that references the industry id."""
    def rewrite(item):
        if _as_int(item.get("id")) != industry.id or item.get("name") == industry.name:
            return None
        return {**item, "name": industry.name}

    return rewrite_tags(rewrite)
