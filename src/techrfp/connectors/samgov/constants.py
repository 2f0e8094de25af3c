"""SAM.gov field names and classification tables.

Tables are ordered; lookups take the first matching entry.
"""

DEFAULT_BASE_URL = "https://api.sam.gov/opportunities/v2/search"
NOTICE_URL_TEMPLATE = "https://sam.gov/opp/{notice_id}"
DATE_PARAM_FORMAT = "%m/%d/%Y"

# Record fields
NOTICE_ID = "noticeId"
TITLE = "title"
SOLICITATION_NUMBER = "solicitationNumber"
PARENT_PATH = "fullParentPathName"
POSTED_DATE = "postedDate"
RESPONSE_DEADLINE = "responseDeadLine"
NAICS_CODE = "naicsCode"
ACTIVE = "active"
UI_LINK = "uiLink"
RESOURCE_LINKS = "resourceLinks"
POINT_OF_CONTACT = "pointOfContact"
PLACE_OF_PERFORMANCE = "placeOfPerformance"
OFFICE_ADDRESS = "officeAddress"

# Response envelope
TOTAL_RECORDS = "totalRecords"
OPPORTUNITIES_DATA = "opportunitiesData"

ACTIVE_SENTINEL = "Yes"

DEFAULT_LOCATION = "Washington, DC"
DEFAULT_ORGANIZATION = "Federal Agency"
DEFAULT_ORGANIZATION_TYPE = "Government"
DEFAULT_WEBSITE = "https://www.usa.gov"
DEFAULT_DEADLINE_DAYS = 30

# Title keyword -> technology category
TECHNOLOGY_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("drupal",), "Drupal"),
    (("wordpress",), "WordPress"),
    (("react", "javascript", "web app"), "React"),
    (("python", "django"), "Python"),
    (("java", "spring"), "Java"),
    (("php", "laravel"), "PHP"),
    (("angular",), "Angular"),
    (("vue",), "Vue.js"),
    ((".net", "c#"), ".NET"),
]

# NAICS code prefix -> technology category
NAICS_TECHNOLOGY: list[tuple[str, str]] = [
    ("541511", "Software Development"),  # Custom Computer Programming Services
    ("541512", "System Design"),  # Computer Systems Design Services
    ("518210", "Web Services"),  # Data Processing, Hosting, and Related Services
]

WEB_TERMS: tuple[str, ...] = ("website", "web", "portal")
WEB_CATEGORY = "Web Development"
FALLBACK_CATEGORY = "Technology Services"

# Parent path keyword -> organization type
ORGANIZATION_TYPE_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("education", "university", "school"), "Education"),
    (("health", "medical", "hospital"), "Healthcare"),
    (("defense", "army", "navy", "air force"), "Defense"),
]

# Organization name keyword -> public website
WEBSITE_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("education",), "https://www.ed.gov"),
    (("health",), "https://www.hhs.gov"),
    (("defense",), "https://www.defense.gov"),
    (("homeland",), "https://www.dhs.gov"),
    (("commerce",), "https://www.commerce.gov"),
    (("agriculture",), "https://www.usda.gov"),
    (("interior",), "https://www.doi.gov"),
    (("justice",), "https://www.justice.gov"),
    (("labor",), "https://www.dol.gov"),
    (("state",), "https://www.state.gov"),
    (("treasury",), "https://www.treasury.gov"),
    (("veterans",), "https://www.va.gov"),
    (("transportation",), "https://www.transportation.gov"),
    (("energy",), "https://www.energy.gov"),
    (("housing",), "https://www.hud.gov"),
    (("gsa", "general services"), "https://www.gsa.gov"),
]

# NAICS code -> estimated contract value band (exact code match)
BUDGET_BANDS: dict[str, tuple[int, int]] = {
    "541511": (100_000, 500_000),  # Custom Programming
    "541512": (200_000, 1_000_000),  # Systems Design
    "518210": (150_000, 750_000),  # Web Services
}
DEFAULT_BUDGET_BAND: tuple[int, int] = (75_000, 300_000)
