from __future__ import annotations

import os


API_BASE_URL = os.environ.get("BALLISTICS_API_URL", "http://127.0.0.1:8000").rstrip("/")
API_TIMEOUT_S = float(os.environ.get("BALLISTICS_API_TIMEOUT", "5"))
CALCULATE_PATH = "/api/ballistics/calculate"

CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]

TRAJECTORY_SAMPLES = 20
MIN_SAMPLE_STEP_YD = 10.0
