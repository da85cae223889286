"""Backend service identity shared by logging and health responses."""
SERVICE_NAME = "backend"
API_VERSION = "1.0.0"
