"""Built-in content served when the datastore cannot answer read routes."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any


def sample_blog_posts(now: datetime | None = None) -> list[dict[str, Any]]:
    created_at = (now or datetime.now(tz=timezone.utc)).isoformat()
    return [
        {
            "id": "1",
            "title": "10 Essential Cybersecurity Tips for Small Businesses",
            "excerpt": "Protect your business from cyber threats with these practical security measures.",
            "content": "Detailed cybersecurity content...",
            "category": "Cybersecurity",
            "featured": True,
            "published": True,
            "created_at": created_at,
            "blog_likes": [{"count": 25}],
            "blog_views": [{"count": 150}],
        },
        {
            "id": "2",
            "title": "Setting Up Your Home Office for Remote Work Success",
            "excerpt": "Complete guide to creating an efficient home office setup.",
            "content": "Remote work setup content...",
            "category": "Remote Work",
            "featured": False,
            "published": True,
            "created_at": created_at,
            "blog_likes": [{"count": 18}],
            "blog_views": [{"count": 95}],
        },
    ]


def _day(day_of_week: int, name: str, standard: tuple[str, str] | None, emergency: tuple[str, str]) -> dict[str, Any]:
    return {
        "day_of_week": day_of_week,
        "day_name": name,
        "is_working_day": standard is not None,
        "standard_start_time": standard[0] if standard else None,
        "standard_end_time": standard[1] if standard else None,
        "emergency_start_time": emergency[0],
        "emergency_end_time": emergency[1],
    }


def default_working_hours() -> list[dict[str, Any]]:
    weekday = ("08:00:00", "18:00:00")
    evening = ("18:00:00", "21:00:00")
    return [
        _day(1, "Monday", weekday, evening),
        _day(2, "Tuesday", weekday, evening),
        _day(3, "Wednesday", weekday, evening),
        _day(4, "Thursday", weekday, evening),
        _day(5, "Friday", weekday, evening),
        _day(6, "Saturday", ("09:00:00", "13:00:00"), ("13:00:00", "17:00:00")),
        _day(0, "Sunday", None, ("09:00:00", "17:00:00")),
    ]


def sample_consultation_slots(on: date) -> list[dict[str, Any]]:
    day = on.isoformat()
    return [
        {"id": "1", "date": day, "start_time": "09:00:00", "end_time": "10:00:00", "is_available": True},
        {"id": "2", "date": day, "start_time": "10:00:00", "end_time": "11:00:00", "is_available": True},
        {"id": "3", "date": day, "start_time": "14:00:00", "end_time": "15:00:00", "is_available": True},
    ]


def basic_services() -> list[dict[str, Any]]:
    """Reference rows inserted directly when the seed RPC is unavailable."""
    return [
        {
            "name": "Digital Profile Setup",
            "slug": "digital-profile-setup",
            "description": "Complete digital presence setup and management",
            "short_description": "Professional digital presence setup",
            "category": "Digital Services",
            "base_price": 2500,
            "currency": "KES",
            "estimated_duration": 120,
            "active": True,
            "is_featured": True,
            "has_emergency_support": True,
            "has_instant_support": True,
            "sort_order": 1,
        },
        {
            "name": "Device Support & Troubleshooting",
            "slug": "device-support",
            "description": "Comprehensive device support and troubleshooting",
            "short_description": "Complete device troubleshooting",
            "category": "Technical Support",
            "base_price": 1500,
            "currency": "KES",
            "estimated_duration": 90,
            "active": True,
            "is_featured": True,
            "has_emergency_support": True,
            "has_instant_support": True,
            "sort_order": 2,
        },
    ]


def sample_support_tickets(user_id: str, now: datetime | None = None) -> list[dict[str, Any]]:
    return [
        {
            "id": "1",
            "ticket_number": "RCH000001",
            "title": "Printer Setup Issue",
            "description": "Cannot connect wireless printer",
            "category": "Device Support",
            "priority": "medium",
            "status": "open",
            "user_id": user_id,
            "created_at": (now or datetime.now(tz=timezone.utc)).isoformat(),
        }
    ]


def sample_government_services() -> list[dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "KRA PIN Registration",
            "slug": "kra-pin",
            "description": "Kenya Revenue Authority PIN registration assistance",
            "category": "Tax Services",
            "estimated_duration": "1-2 business days",
            "government_fees": {"amount": 0, "currency": "KES"},
            "service_fees": {"amount": 500, "currency": "KES"},
        }
    ]
