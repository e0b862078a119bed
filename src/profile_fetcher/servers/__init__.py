"""
Demo Servers Module

A plain-text path router and a static file server.
"""

from .router import make_text_server
from .static import make_static_server

__all__ = ["make_static_server", "make_text_server"]
