"""Edge service identity shared by logging and health responses."""
SERVICE_NAME = "edge"
SERVICE_TITLE = "RemotCyberHelp API"
API_VERSION = "1.0.0"
