# -*- coding: utf-8 -*-
"""Public entry-points for the identity number codec."""
from __future__ import annotations

from .codec import clean_identity_text, convert_legacy_to_modern, extract_info, normalize, validate
from .errors import InvalidIdentityNumberError
from .types import IdentityFormat, IdentityInfo, NormalizedIdentity, ValidationResult

__all__ = [
    "IdentityFormat",
    "IdentityInfo",
    "InvalidIdentityNumberError",
    "NormalizedIdentity",
    "ValidationResult",
    "clean_identity_text",
    "convert_legacy_to_modern",
    "extract_info",
    "normalize",
    "validate",
]
