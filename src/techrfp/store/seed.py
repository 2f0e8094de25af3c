"""Demo opportunities used to seed a fresh store."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from techrfp.models.opportunity import Opportunity

# Deadlines and posted dates are offsets (in days) from the seeding time so the
# demo list stays current.
_SEED_ROWS: list[dict[str, Any]] = [
    {
        "id": "5b0e3c0e-2f6c-4a63-9d38-6f1f1d0a8b01",
        "title": "University Website Redesign & Development",
        "organization": "State University of Technology",
        "description": (
            "Seeking experienced Drupal developers to redesign and redevelop the university's main "
            "website. Requirements include custom module development, integration with student "
            "information systems, accessibility compliance, and responsive design."
        ),
        "technology_category": "Drupal",
        "budget_min": 150_000,
        "budget_max": 200_000,
        "deadline_days": 41,
        "posted_days_ago": 12,
        "location": "California, USA",
        "organization_type": "Education",
        "contact_email": "procurement@statetech.edu",
        "organization_website": "https://www.statetech.edu",
        "document_url": "https://www.statetech.edu/procurement/rfp-website-redesign.pdf",
        "is_priority_category": True,
    },
    {
        "id": "9c1a7f52-6d1e-4b8e-a0f4-2d3b5e7c9a02",
        "title": "E-commerce Platform Development",
        "organization": "Green Earth Retailers",
        "description": (
            "WordPress-based e-commerce solution with WooCommerce integration. Need custom theme "
            "development, payment gateway integration, inventory management, and mobile optimization."
        ),
        "technology_category": "WordPress",
        "budget_min": 75_000,
        "budget_max": 100_000,
        "deadline_days": 15,
        "posted_days_ago": 20,
        "location": "New York, USA",
        "organization_type": "Private",
        "contact_email": "tech@greenearthretailers.com",
        "organization_website": "https://www.greenearthretailers.com",
        "document_url": "https://www.greenearthretailers.com/procurement/ecommerce-rfp.pdf",
        "is_priority_category": False,
    },
    {
        "id": "e4d2b8a1-3c5f-4e7a-9b6d-8f0a1c2e4b03",
        "title": "Customer Portal Web Application",
        "organization": "TechFlow Solutions Inc.",
        "description": (
            "React-based customer portal with real-time data visualization, user authentication, and "
            "integration with existing APIs. Must include dashboard functionality and reporting tools."
        ),
        "technology_category": "React",
        "budget_min": 200_000,
        "budget_max": 300_000,
        "deadline_days": 25,
        "posted_days_ago": 7,
        "location": "Texas, USA",
        "organization_type": "Private",
        "contact_email": "projects@techflow.com",
        "organization_website": "https://www.techflow.com",
        "document_url": "https://www.techflow.com/rfp/customer-portal-requirements.pdf",
        "is_priority_category": False,
    },
    {
        "id": "1f6e9d3c-7a2b-4c8d-b5e0-3a9f7c1d2e04",
        "title": "Healthcare Data Management System",
        "organization": "Regional Medical Center",
        "description": (
            "Drupal-based patient data management system with HIPAA compliance, custom workflows, and "
            "integration with electronic health records."
        ),
        "technology_category": "Drupal",
        "budget_min": 400_000,
        "budget_max": 500_000,
        "deadline_days": 20,
        "posted_days_ago": 25,
        "location": "Florida, USA",
        "organization_type": "Non-profit",
        "contact_email": "it@regionalmedical.org",
        "organization_website": "https://www.regionalmedical.org",
        "document_url": "https://www.regionalmedical.org/procurement/healthcare-data-system-rfp.pdf",
        "is_priority_category": True,
    },
    {
        "id": "7b3c5e9f-1d4a-4f6b-8c2e-5d7a9b1f3c05",
        "title": "Data Analytics Platform",
        "organization": "City Planning Department",
        "description": (
            "Python-based data analytics platform for urban planning insights. Machine learning "
            "integration, data visualization, and predictive analytics for city development projects."
        ),
        "technology_category": "Python",
        "budget_min": 120_000,
        "budget_max": 180_000,
        "deadline_days": 36,
        "posted_days_ago": 3,
        "location": "Washington, USA",
        "organization_type": "Government",
        "contact_email": "tech@cityplanning.gov",
        "organization_website": "https://www.cityplanning.gov",
        "document_url": "https://www.cityplanning.gov/rfp/data-analytics-platform.pdf",
        "is_priority_category": False,
    },
    {
        "id": "3e8a1b5d-9c7f-4a2e-b6d4-1f3c5a7e9b06",
        "title": "Community Portal Enhancement",
        "organization": "Metropolitan Library System",
        "description": (
            "Drupal 10 upgrade and enhancement project for community library portal. Features include "
            "event management, digital resource access, and multi-location support."
        ),
        "technology_category": "Drupal",
        "budget_min": 80_000,
        "budget_max": 120_000,
        "deadline_days": 31,
        "posted_days_ago": 15,
        "location": "Illinois, USA",
        "organization_type": "Government",
        "contact_email": "digital@metrolibraries.org",
        "organization_website": "https://www.metrolibraries.org",
        "document_url": "https://www.metrolibraries.org/rfp/community-portal-enhancement.pdf",
        "is_priority_category": True,
    },
    {
        "id": "c2f4a6e8-5b1d-4e3a-9f7c-6b8d0e2a4c07",
        "title": "Non-profit Fundraising Platform",
        "organization": "Global Climate Initiative",
        "description": (
            "WordPress-based fundraising and donor management platform. Features include online "
            "donations, campaign management, volunteer coordination, and impact reporting."
        ),
        "technology_category": "WordPress",
        "budget_min": 45_000,
        "budget_max": 70_000,
        "deadline_days": 10,
        "posted_days_ago": 28,
        "location": "Oregon, USA",
        "organization_type": "Non-profit",
        "contact_email": "tech@globalclimate.org",
        "organization_website": "https://www.globalclimate.org",
        "document_url": "https://www.globalclimate.org/rfp/fundraising-platform-requirements.pdf",
        "is_priority_category": False,
    },
    {
        "id": "8d5f7a9c-2e4b-4d6f-a1c3-7e9b1d3f5a08",
        "title": "Enterprise Resource Planning System",
        "organization": "Manufacturing Solutions Corp",
        "description": (
            "Angular-based ERP system for manufacturing operations. Includes inventory management, "
            "production scheduling, quality control, and reporting modules."
        ),
        "technology_category": "Angular",
        "budget_min": 350_000,
        "budget_max": 450_000,
        "deadline_days": 57,
        "posted_days_ago": 9,
        "location": "Michigan, USA",
        "organization_type": "Private",
        "contact_email": "erp@mfgsolutions.com",
        "organization_website": "https://www.mfgsolutions.com",
        "document_url": "https://www.mfgsolutions.com/procurement/erp-system-rfp.pdf",
        "is_priority_category": False,
    },
]


def seed_opportunities(now: Optional[datetime] = None) -> list[Opportunity]:
    """Build the demo list with deadlines relative to now."""
    now = now or datetime.now(timezone.utc)
    opportunities = []
    for row in _SEED_ROWS:
        fields = dict(row)
        deadline_days = fields.pop("deadline_days")
        posted_days_ago = fields.pop("posted_days_ago")
        opportunities.append(
            Opportunity(
                **fields,
                source="seed",
                deadline=now + timedelta(days=deadline_days),
                posted_date=now - timedelta(days=posted_days_ago),
            )
        )
    return opportunities
