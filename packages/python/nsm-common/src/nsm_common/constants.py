"""Shared constants for nginx-server-manager."""

from pathlib import Path

# Audit / logging
STATE_DIR = Path.home() / ".local" / "state" / "nsm"
LOG_DIR = STATE_DIR / "log"
AUDIT_JSONL_PATH = LOG_DIR / "audit.jsonl"
AUDIT_DB_PATH = STATE_DIR / "audit.db"

# Server block defaults
DEFAULT_LISTEN = "80"
DEFAULT_INDEX = "index.html"
DEFAULT_PROXY_HOST = "127.0.0.1"

# Backup files are written next to the target as <path>.backup.<unix-ts>
BACKUP_SUFFIX = ".backup"

# Auto-detection
NGINX_CONF_PATHS = (
    Path("/etc/nginx/nginx.conf"),
    Path("/usr/local/etc/nginx/nginx.conf"),
    Path("/usr/local/nginx/conf/nginx.conf"),
    Path("/opt/nginx/conf/nginx.conf"),
    Path("/etc/nginx.conf"),
)
NGINX_BINARY_PATHS = (
    Path("/usr/sbin/nginx"),
    Path("/usr/bin/nginx"),
    Path("/usr/local/sbin/nginx"),
    Path("/usr/local/bin/nginx"),
    Path("/opt/nginx/sbin/nginx"),
    Path("/sbin/nginx"),
    Path("/bin/nginx"),
)
NGINX_KEYWORDS = ("http", "server", "location", "events")
DETECT_TIMEOUT = 10.0
