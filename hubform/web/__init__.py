"""Web front ends: server-rendered form and JSON proxy."""

from hubform.web.app import create_app

__all__ = ["create_app"]
