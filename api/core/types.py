"""
Shared request field types.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import StringConstraints

# Canonical 8-4-4-4-12 v4 form. The value is kept exactly as the client sent
# it: it is used verbatim in cache keys written by other services.
UUID_V4_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"

UUIDv4 = Annotated[str, StringConstraints(pattern=UUID_V4_PATTERN)]
