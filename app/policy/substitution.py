"""Placeholder substitution for policy template content.

Templates reach us from many authors, so the same logical value shows up in
several spellings: ``{{CLIENT_NAME}}``, ``[COMPANY NAME]``, ``[Company Name]``,
or a whole phrase such as ``Approved By: [CISO Name]``. The catalog below lists
every known spelling together with the client field it resolves to.

Patterns are literal text matched case-insensitively and replaced globally.
Passes run in catalog order and each one sees the output of the previous
pass, so a phrase that contains a shorter token must run before that token.
``order_by_specificity`` enforces this when the catalog is built.

A value is inserted literally and is not re-scanned by the pass that
inserted it. If a client value itself contains a token whose pass already
ran (an industry of ``{{CLIENT_NAME}} services``), that token survives the
first call and only a second call resolves it.
"""
from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

POLICY_VERSION = "1.0"

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Human-readable labels, used for "[Missing <Label>]" fallbacks.
FIELD_LABELS: Dict[str, str] = {
    "company_name": "Company Name",
    "industry": "Industry",
    "ciso_name": "CISO Name",
    "dpo_name": "DPO Name",
    "headquarters": "Headquarters Location",
    "location": "Location",
    "region": "Region",
    "contact_email": "Contact Email",
    "legal_entity_name": "Legal Entity Name",
    "effective_date": "Effective Date",
    "review_date": "Review Date",
    "version": "Version",
}


@dataclass(frozen=True)
class Placeholder:
    """One spelling of a template variable.

    ``prefix`` is re-emitted in front of the value for phrase patterns such as
    ``Effective Date: [Date]``.
    """

    pattern: str
    field: str
    prefix: str = ""

    @cached_property
    def regex(self) -> "re.Pattern[str]":
        return re.compile(re.escape(self.pattern), re.IGNORECASE)

    def contains(self, other: "Placeholder") -> bool:
        """True when ``other`` would match strictly inside this pattern."""
        outer, inner = self.pattern.lower(), other.pattern.lower()
        return inner != outer and inner in outer


def order_by_specificity(entries: Sequence[Placeholder]) -> Tuple[Placeholder, ...]:
    """Stable topological order: containing patterns precede contained ones.

    Declaration order is kept wherever no containment constraint applies.
    """
    remaining: List[Placeholder] = list(entries)
    ordered: List[Placeholder] = []
    while remaining:
        for index, candidate in enumerate(remaining):
            blocked = any(other.contains(candidate) for other in remaining)
            if not blocked:
                ordered.append(remaining.pop(index))
                break
        else:  # pragma: no cover - containment on distinct strings cannot cycle
            raise ValueError("Placeholder catalog has cyclic containment")
    return tuple(ordered)


_DECLARED: Tuple[Placeholder, ...] = (
    # Company / client name
    Placeholder("{{CLIENT_NAME}}", "company_name"),
    Placeholder("{{COMPANY_NAME}}", "company_name"),
    Placeholder("[COMPANY NAME]", "company_name"),
    Placeholder("[CLIENT NAME]", "company_name"),
    Placeholder("Company's Name", "company_name"),
    Placeholder("[Company Name]", "company_name"),
    Placeholder("[Organization Name]", "company_name"),
    # Industry
    Placeholder("{{INDUSTRY}}", "industry"),
    Placeholder("[INDUSTRY]", "industry"),
    Placeholder("[Industry]", "industry"),
    # CISO / approver
    Placeholder("Approved By: [CISO Name]", "ciso_name", prefix="Approved By: "),
    Placeholder("{{CISO_NAME}}", "ciso_name"),
    Placeholder("[CISO NAME]", "ciso_name"),
    Placeholder("[CISO Name]", "ciso_name"),
    # DPO
    Placeholder("{{DPO_NAME}}", "dpo_name"),
    Placeholder("[DPO NAME]", "dpo_name"),
    Placeholder("[DPO Name]", "dpo_name"),
    # Headquarters / location
    Placeholder("{{HEADQUARTERS}}", "headquarters"),
    Placeholder("[HEADQUARTERS]", "headquarters"),
    Placeholder("[Headquarters]", "headquarters"),
    Placeholder("[Location]", "location"),
    # Region
    Placeholder("{{REGION}}", "region"),
    Placeholder("[REGION]", "region"),
    Placeholder("[Region]", "region"),
    # Contact
    Placeholder("{{CONTACT_EMAIL}}", "contact_email"),
    Placeholder("[CONTACT EMAIL]", "contact_email"),
    Placeholder("[Contact Email]", "contact_email"),
    # Legal entity
    Placeholder("{{LEGAL_ENTITY_NAME}}", "legal_entity_name"),
    Placeholder("[LEGAL ENTITY NAME]", "legal_entity_name"),
    Placeholder("[Legal Entity Name]", "legal_entity_name"),
    # Effective date
    Placeholder("Effective Date: [Date]", "effective_date", prefix="Effective Date: "),
    Placeholder("{{EFFECTIVE_DATE}}", "effective_date"),
    Placeholder("[EFFECTIVE DATE]", "effective_date"),
    Placeholder("[Effective Date]", "effective_date"),
    Placeholder("[Date]", "effective_date"),
    # Review date (one year out)
    Placeholder("Review Date: [Date + 1 Year]", "review_date", prefix="Review Date: "),
    Placeholder("{{REVIEW_DATE}}", "review_date"),
    Placeholder("[Date + 1 Year]", "review_date"),
    Placeholder("[REVIEW DATE]", "review_date"),
    Placeholder("[Review Date]", "review_date"),
    # Version
    Placeholder("{{VERSION}}", "version"),
    Placeholder("[VERSION]", "version"),
    Placeholder("[Version]", "version"),
)

CATALOG: Tuple[Placeholder, ...] = order_by_specificity(_DECLARED)


def format_long_date(value: datetime.date) -> str:
    """Format as ``October 18, 2026`` independent of the process locale."""
    return f"{_MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def add_one_year(value: datetime.date) -> datetime.date:
    """Same calendar day next year; Feb 29 rolls over to Mar 1."""
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        return datetime.date(value.year + 1, 3, 1)


def _text(profile: Any, attr: str) -> Optional[str]:
    value = getattr(profile, attr, None)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def resolve_fields(profile: Any, today: Optional[datetime.date] = None) -> Dict[str, Optional[str]]:
    """Resolve every logical field to its value (``None`` when missing)."""
    today = today or datetime.date.today()
    name = _text(profile, "name")
    headquarters = _text(profile, "headquarters")
    return {
        "company_name": name,
        "industry": _text(profile, "industry") or "[Industry]",
        "ciso_name": _text(profile, "ciso_name") or "[CISO Name]",
        "dpo_name": _text(profile, "dpo_name") or "[DPO Name]",
        "headquarters": headquarters or "[Headquarters Location]",
        "location": headquarters or "[Location]",
        "region": _text(profile, "main_service_region") or _text(profile, "region") or "[Region]",
        "contact_email": _text(profile, "primary_contact_email") or "[Contact Email]",
        "legal_entity_name": _text(profile, "legal_entity_name") or name,
        "effective_date": format_long_date(today),
        "review_date": format_long_date(add_one_year(today)),
        "version": POLICY_VERSION,
    }


def build_substitution_map(
    profile: Any,
    today: Optional[datetime.date] = None,
    catalog: Iterable[Placeholder] = CATALOG,
) -> List[Tuple[Placeholder, str]]:
    """Return ``(placeholder, replacement)`` pairs in application order."""
    fields = resolve_fields(profile, today)
    pairs: List[Tuple[Placeholder, str]] = []
    for placeholder in catalog:
        value = fields.get(placeholder.field) or f"[Missing {FIELD_LABELS[placeholder.field]}]"
        pairs.append((placeholder, placeholder.prefix + value))
    return pairs


def substitute(
    content: Optional[str],
    profile: Any,
    today: Optional[datetime.date] = None,
) -> str:
    """Replace every known placeholder in ``content`` with client values.

    Unknown text passes through unchanged. ``None`` or empty content yields ``""``.
    """
    if not content:
        return ""

    replaced = content
    hits = 0
    for placeholder, replacement in build_substitution_map(profile, today):
        replaced, count = placeholder.regex.subn(lambda _match, value=replacement: value, replaced)
        hits += count
    LOGGER.debug("Substituted %d placeholder occurrence(s)", hits)
    return replaced


__all__ = [
    "CATALOG",
    "FIELD_LABELS",
    "POLICY_VERSION",
    "Placeholder",
    "add_one_year",
    "build_substitution_map",
    "format_long_date",
    "order_by_specificity",
    "resolve_fields",
    "substitute",
]
