"""nginx-server-manager — add server blocks to an existing nginx.conf."""

__version__ = "0.1.0"
