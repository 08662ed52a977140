from pathlib import Path

# Repo-root conventional directories/files (overrideable via --config)
CONFIG_DIR = Path("configs")
SERVICE_CONFIG_FILE = CONFIG_DIR / "service.yaml"

# Header carrying the correlation (transaction) id across service boundaries
TRANSACTION_ID_HEADER = "X-Request-Id"
