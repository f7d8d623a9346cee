"""
Runtime settings read from the environment.
"""
from __future__ import annotations

import os

from social_badminton.payouts import DEFAULT_ENTRY_FEE

ENTRY_FEE = float(os.environ.get("SOCIAL_BADMINTON_ENTRY_FEE", DEFAULT_ENTRY_FEE))
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "SOCIAL_BADMINTON_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if o.strip()
]
LOG_LEVEL = os.environ.get("SOCIAL_BADMINTON_LOG_LEVEL", "INFO").upper()
