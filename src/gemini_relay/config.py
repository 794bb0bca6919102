"""Runtime configuration, read once from the environment."""

import os

# Where we forward to - the third-party inference API
UPSTREAM_URL = os.environ.get("UPSTREAM_URL", "https://api.nyxs.pw")

# Seconds; inference calls can be slow, connects should not be
UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "300"))
UPSTREAM_CONNECT_TIMEOUT = float(os.environ.get("UPSTREAM_CONNECT_TIMEOUT", "10"))

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8080"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
