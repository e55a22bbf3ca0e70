# File: app/client/__init__.py
from .dashboard_client import ApiError, DashboardClient
from .store import DashboardStore, LoadState, LoadStatus
