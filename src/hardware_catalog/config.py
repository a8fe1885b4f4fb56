import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hardware.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Page size used when a client does not ask for one; 0 disables paging
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "5"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# Creation notifications go out by mail only when MAIL_ACTIVE is set
MAIL_ACTIVE = os.getenv("MAIL_ACTIVE", "false").lower() in ("1", "true", "yes")
MAIL_HOST = os.getenv("MAIL_HOST", "localhost")
MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
MAIL_FROM = os.getenv("MAIL_FROM", "catalog@localhost")
MAIL_TO = os.getenv("MAIL_TO", "admin@localhost")
