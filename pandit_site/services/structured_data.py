"""JSON-LD builders for the schema.org entities the site describes."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

SITE_URL = "https://panditrajesh.ie"
PERSON_NAME = "Pandit Rajesh Joshi"
CONTACT_EMAIL = "panditjoshirajesh@gmail.com"
LOGO_URL = f"{SITE_URL}/images/Logo/Raj ji.png"

SAME_AS = [
    "https://www.facebook.com/panditrajesh",
    "https://www.instagram.com/panditrajesh",
    "https://www.youtube.com/@panditrajesh",
    "https://www.linkedin.com/in/panditrajesh",
]

_AREAS_SERVED = ("Ireland", "United Kingdom", "Northern Ireland")


def _offer(name: str, description: str) -> Dict[str, Any]:
    return {
        "@type": "Offer",
        "itemOffered": {"@type": "Service", "name": name, "description": description},
    }


def organization_schema() -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": ["Organization", "ReligiousOrganization"],
        "name": "Pandit Rajesh Joshi - Hindu Pooja & Sanatan Dharma Services Ireland",
        "alternateName": "Irish Hindu Pandit - Rajesh Joshi",
        "url": SITE_URL,
        "logo": LOGO_URL,
        "description": (
            "Authentic Hindu Pooja services, Sanatan Dharma rituals, and traditional "
            "Hindu ceremonies by experienced Irish Hindu Pandit. Serving Ireland, UK, "
            "and Northern Ireland."
        ),
        "foundingDate": "2009",
        "contactPoint": {
            "@type": "ContactPoint",
            "contactType": "Customer Service",
            "email": CONTACT_EMAIL,
            "availableLanguage": ["English", "Hindi", "Sanskrit"],
            "areaServed": ["IE", "GB", "Northern Ireland"],
        },
        "sameAs": list(SAME_AS),
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": "Hindu Pooja Services",
            "itemListElement": [
                _offer("Hindu Pooja Ceremonies", "Authentic Hindu Pooja and Sanatan Dharma rituals"),
                _offer("Hindu Wedding Ceremonies", "Traditional Hindu wedding rituals and ceremonies"),
                _offer("Hindu Rituals", "All types of Hindu rituals and Sanskars"),
            ],
        },
    }


def person_schema() -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "Person",
        "name": "Rajesh Joshi",
        "alternateName": [PERSON_NAME, "Irish Hindu Pandit", "Pandit Ji"],
        "jobTitle": "Hindu Pandit & Spiritual Guide",
        "url": SITE_URL,
        "image": LOGO_URL,
        "email": CONTACT_EMAIL,
        "knowsLanguage": ["English", "Hindi", "Sanskrit"],
        "sameAs": list(SAME_AS),
    }


def service_schema(name: str, description: str, category: str) -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "Service",
        "name": name,
        "description": description,
        "serviceType": f"Hindu {category}",
        "provider": {"@type": "Person", "name": PERSON_NAME},
        "areaServed": [{"@type": "Place", "name": area} for area in _AREAS_SERVED],
    }


def breadcrumb_schema(items: Sequence[Tuple[str, str]]) -> Dict[str, Any]:
    """Build a BreadcrumbList from ``(name, url)`` pairs, positions starting at 1."""
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": i, "name": name, "item": url}
            for i, (name, url) in enumerate(items, start=1)
        ],
    }


def faq_schema(faqs: List[Tuple[str, str]]) -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in faqs
        ],
    }


HINDU_POOJA_FAQS: List[Tuple[str, str]] = [
    (
        "What is Hindu Pooja and why is it important?",
        "Hindu Pooja is a sacred ritual of worship in Sanatan Dharma where devotees honor "
        "deities through mantras, offerings, and traditional ceremonies.",
    ),
    (
        "Where can I find an authentic Hindu Pandit in Ireland?",
        "Pandit Rajesh Joshi is an experienced Irish Hindu Pandit serving all of Ireland, "
        "the UK, and Northern Ireland with authentic Hindu ceremonies.",
    ),
    (
        "How do I book a Hindu Pandit for Pooja in Ireland or UK?",
        "Contact Pandit Rajesh Joshi through the website contact form, WhatsApp, or email.",
    ),
    (
        "Can I get Hindu Pooja services in Northern Ireland and UK?",
        "Yes, Hindu Pooja services are provided throughout Ireland, Northern Ireland, "
        "and the United Kingdom.",
    ),
]


def page_schema(
    page_id: str,
    canonical_url: str = "",
    title: Optional[str] = None,
    site_url: str = "",
) -> Dict[str, Any]:
    """Pick the JSON-LD entity describing *page_id*; the organization is the default.

    Breadcrumb links are built from *site_url*, the same origin as *canonical_url*.
    """
    if page_id == "about":
        return person_schema()
    if page_id == "services":
        return service_schema(
            "Hindu Pooja Ceremonies",
            "Authentic Hindu Pooja and Sanatan Dharma rituals",
            "Pooja",
        )
    if page_id == "why-choose-us":
        return faq_schema(HINDU_POOJA_FAQS)
    if page_id == "blog-detail" and title:
        origin = site_url.rstrip("/")
        return breadcrumb_schema(
            [("Home", f"{origin}/"), ("Blog", f"{origin}/blog"), (title, canonical_url)]
        )
    return organization_schema()
