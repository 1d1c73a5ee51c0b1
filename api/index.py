"""Vercel serverless entrypoint.

Deployments default ``ENVIRONMENT`` to the Vercel environment and advertise
the deployment URL as the public base URL unless they are set explicitly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("ENVIRONMENT", os.getenv("VERCEL_ENV", "production"))
if os.getenv("VERCEL_URL"):
    os.environ.setdefault("PUBLIC_BASE_URL", f"https://{os.environ['VERCEL_URL']}")

from food_api.api.asgi import app  # noqa: E402

__all__ = ["app"]
