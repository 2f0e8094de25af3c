"""Field extraction and classification for SAM.gov opportunity records.

Every function here is total: missing or malformed input yields a fixed
default rather than an exception.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from .constants import (
    BUDGET_BANDS,
    DEFAULT_BUDGET_BAND,
    DEFAULT_LOCATION,
    DEFAULT_ORGANIZATION,
    DEFAULT_ORGANIZATION_TYPE,
    DEFAULT_WEBSITE,
    FALLBACK_CATEGORY,
    NAICS_TECHNOLOGY,
    NOTICE_ID,
    NOTICE_URL_TEMPLATE,
    OFFICE_ADDRESS,
    ORGANIZATION_TYPE_KEYWORDS,
    PLACE_OF_PERFORMANCE,
    POINT_OF_CONTACT,
    POSTED_DATE,
    RESOURCE_LINKS,
    SOLICITATION_NUMBER,
    TECHNOLOGY_KEYWORDS,
    UI_LINK,
    WEB_CATEGORY,
    WEB_TERMS,
    WEBSITE_KEYWORDS,
)

DATE_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S")


def _lower(text: Any) -> str:
    return text.lower() if isinstance(text, str) else ""


def _dig(obj: Any, *keys: str) -> Any:
    """Walk nested dicts; None as soon as a level is missing or not a dict."""
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _sub_record(record: dict[str, Any], key: str) -> Any:
    """Nested structures appear under 'data' in some feeds and top-level in others."""
    nested = _dig(record, "data", key)
    return nested if nested is not None else record.get(key)


def match_keywords(
    text: str,
    table: list[tuple[tuple[str, ...], str]],
) -> Optional[str]:
    """Return the result of the first table row with a keyword contained in text."""
    for keywords, result in table:
        if any(kw in text for kw in keywords):
            return result
    return None


def classify_technology(title: Optional[str], naics_code: Optional[str]) -> str:
    """
    Title keywords win over the NAICS code table; then generic web terms;
    then "Technology Services".
    """
    title_lower = _lower(title)
    category = match_keywords(title_lower, TECHNOLOGY_KEYWORDS)
    if category:
        return category

    code = naics_code.strip() if isinstance(naics_code, str) else ""
    if code:
        for prefix, naics_category in NAICS_TECHNOLOGY:
            if code.startswith(prefix):
                return naics_category

    if any(term in title_lower for term in WEB_TERMS):
        return WEB_CATEGORY
    return FALLBACK_CATEGORY


def classify_organization_type(org_path: Optional[str]) -> str:
    """Organization type from the agency hierarchy path; defaults to Government."""
    return match_keywords(_lower(org_path), ORGANIZATION_TYPE_KEYWORDS) or DEFAULT_ORGANIZATION_TYPE


def extract_location(record: dict[str, Any]) -> str:
    """'City, State' from place of performance, then office address, then the feed default."""
    pop = _sub_record(record, PLACE_OF_PERFORMANCE)
    city = _text(_dig(pop, "city", "name"))
    state = _text(_dig(pop, "state", "name"))
    if city and state:
        return f"{city}, {state}"

    office = _sub_record(record, OFFICE_ADDRESS)
    city = _text(_dig(office, "city"))
    state = _text(_dig(office, "state"))
    if city and state:
        return f"{city}, {state}"

    return DEFAULT_LOCATION


def extract_organization(org_path: Optional[str]) -> str:
    """Top-level department from a dotted path like 'DEPT OF DEFENSE.DEPT OF THE ARMY.AMC'."""
    if not isinstance(org_path, str):
        return DEFAULT_ORGANIZATION
    return org_path.split(".")[0].strip() or DEFAULT_ORGANIZATION


def estimate_budget(naics_code: Optional[str], bound: str) -> int:
    """
    Estimated contract value for a NAICS code.

    This is a heuristic band keyed on the exact NAICS code, not a figure
    taken from the notice; the feed does not reliably expose contract value.
    Unknown codes get the default band. bound is "min" or "max".
    """
    if bound not in ("min", "max"):
        raise ValueError(f"bound must be 'min' or 'max', got {bound!r}")
    code = naics_code.strip() if isinstance(naics_code, str) else ""
    low, high = BUDGET_BANDS.get(code, DEFAULT_BUDGET_BAND)
    return low if bound == "min" else high


def build_website(org_name: Optional[str]) -> str:
    """Known department root domain, else the general federal portal."""
    return match_keywords(_lower(org_name), WEBSITE_KEYWORDS) or DEFAULT_WEBSITE


def parse_date(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 or MM/DD/YYYY dates. Naive results are taken as UTC."""
    text = _text(value)
    if not text:
        return None
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_contact_email(record: dict[str, Any]) -> Optional[str]:
    """Email of the first point of contact, if any."""
    contacts = _sub_record(record, POINT_OF_CONTACT)
    if isinstance(contacts, list) and contacts:
        return _text(_dig(contacts[0], "email"))
    return None


def extract_document_url(record: dict[str, Any]) -> Optional[str]:
    """First resource link, else the notice UI link, else the public notice URL."""
    links = record.get(RESOURCE_LINKS)
    if isinstance(links, list):
        for link in links:
            url = _text(link)
            if url:
                return url
    ui_link = _text(record.get(UI_LINK))
    if ui_link:
        return ui_link
    notice_id = _text(record.get(NOTICE_ID))
    if notice_id:
        return NOTICE_URL_TEMPLATE.format(notice_id=notice_id)
    return None


def build_description(record: dict[str, Any], title: str) -> str:
    """
    Summary sentence for a notice. The feed's own description field is a
    link to a separate endpoint, not text.
    """
    solicitation = _text(record.get(SOLICITATION_NUMBER)) or "N/A"
    posted = _text(record.get(POSTED_DATE)) or "unknown date"
    return (
        f"Federal procurement opportunity: {title}. "
        f"Solicitation Number: {solicitation}. Posted on {posted}. "
        "Please review the full solicitation documents for detailed requirements "
        "and submission instructions."
    )
