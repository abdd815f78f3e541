"""
Constants for guardrails in Gen-Form.

This module contains all constants and patterns used by the guardrail
system. Centralizing these makes them easier to maintain and update.
"""

import re

# Patterns that might indicate injection attempts
SUSPICIOUS_PATTERNS = [
    r"<script",
    r"javascript:",
    r"\bon\w+\s*=",
    r"\{\{.*\}\}",
    r"\$\{.*\}",
    r"eval\s*\(",
    r"__proto__",
]

# Field names must be usable as form control identifiers
VALID_FIELD_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

MAX_FIELD_NAME_LENGTH = 100
