"""Edge-level constants shared across modules."""
from __future__ import annotations


class Role:
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


ADMIN_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)


class Table:
    USER_PROFILES = "user_profiles"
    SERVICES = "services"
    BLOG_POSTS = "blog_posts"
    SUPPORT_TICKETS = "support_tickets"
    CONSULTATIONS = "consultations"
    CONSULTATION_SLOTS = "consultation_time_slots"
    CONTACT_FORMS = "contact_forms"
    WORKING_HOURS = "working_hours"
    TICKET_MESSAGES = "ticket_messages"
    NEWSLETTERS = "newsletters"
    BLOG_LIKES = "blog_likes"
    BLOG_VIEWS = "blog_views"
    GOVERNMENT_SERVICES = "government_services"
    GOVERNMENT_REQUESTS = "government_requests"


# Tables the fallback schema check probes, in probe order.
REQUIRED_TABLES: tuple[str, ...] = (
    Table.USER_PROFILES,
    Table.SERVICES,
    Table.BLOG_POSTS,
    Table.SUPPORT_TICKETS,
    Table.CONSULTATIONS,
    Table.CONTACT_FORMS,
    Table.WORKING_HOURS,
)

REFERENCE_TABLE = Table.SERVICES


class ContactStatus:
    NEW = "new"


class ConsultationStatus:
    PENDING = "pending"


class TicketStatus:
    OPEN = "open"


class GovernmentRequestStatus:
    PENDING = "pending"
