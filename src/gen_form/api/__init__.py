"""
HTTP boundary for Gen-Form.

Starlette app exposing form generation over JSON.
"""

from gen_form.api.app import create_app

__all__ = [
    "create_app",
]
