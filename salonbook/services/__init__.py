"""Business logic services for SalonBook."""

# Service modules are imported individually where needed
# to avoid circular imports

__all__ = [
    "calendar",
    "reminder_category",
    "reminder_schedule",
    "customer_listing",
    "customer_commands",
    "customer_repository",
    "customer_book",
    "whatsapp",
    "reminder_dispatch",
    "service_catalog",
    "business_profile",
]
