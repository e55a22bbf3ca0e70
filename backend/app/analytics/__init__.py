# File: app/analytics/__init__.py
from .trends import chart_points, month_trend, rolling_trend, summarize
from .ranges import selected_range
from .table import build_file_link, filter_documents, format_customer_label, paginate
