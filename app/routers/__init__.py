"""API routers for the policy generation service."""

from . import clients, policies, templates

__all__ = ["clients", "templates", "policies"]
