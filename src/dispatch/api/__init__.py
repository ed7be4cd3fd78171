"""Dispatch domain API package."""

from dispatch.api.routes import delivery_router, notification_router, order_router, profile_router

__all__ = ["order_router", "profile_router", "delivery_router", "notification_router"]
