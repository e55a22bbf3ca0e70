# File: app/export/__init__.py
from .csv_export import export_header, export_records, to_csv
