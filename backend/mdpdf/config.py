from __future__ import annotations

import os

APP_VERSION = "0.1.0"

FETCH_TIMEOUT_S = float(os.getenv("MDPDF_FETCH_TIMEOUT_S", "15"))
MAX_FETCH_BYTES = int(os.getenv("MDPDF_MAX_FETCH_BYTES", "2000000"))
USER_AGENT = os.getenv("MDPDF_USER_AGENT", f"github-md-pdf/{APP_VERSION}")

CORS_ORIGINS = [o.strip() for o in os.getenv("MDPDF_CORS_ORIGINS", "*").split(",") if o.strip()] or ["*"]

LOG_LEVEL = os.getenv("MDPDF_LOG_LEVEL", "INFO").strip().upper() or "INFO"
