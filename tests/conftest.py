"""
Shared pytest fixtures for the shapeguard test-suite.
"""

import pytest


@pytest.fixture
def user_schema() -> dict:
    """A small user schema with a field union, a default and a nested object."""
    return {
        "display_name": {"type": "string", "max": 32},
        "username": {"type": "string", "min": 3, "max": 16, "pattern": r"^[a-z0-9_]+$"},
        "email": {"type": "string", "lowercase": True},
        "role": {"type": "string", "enum": ["admin", "user"], "default": "user"},
        "permissions": [
            {"type": "string", "enum": ["*"]},
            {
                "type": "array",
                "items": {"type": "string", "enum": ["read", "write"]},
            },
        ],
        "address": {
            "type": "object",
            "required": False,
            "properties": {
                "city": {"type": "string"},
                "zip_code": {"type": "string", "nullable": True},
            },
        },
    }


@pytest.fixture
def user_payload() -> dict:
    return {
        "display_name": "  Ada Lovelace ",
        "username": "ada",
        "email": "Ada@Example.COM",
        "permissions": ["read"],
    }
