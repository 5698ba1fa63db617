"""API route handlers."""
from . import assets, crypto, dashboard, export, labels, reports, snapshots

__all__ = ["assets", "crypto", "dashboard", "export", "labels", "reports", "snapshots"]
