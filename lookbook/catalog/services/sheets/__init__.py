"""
Product spreadsheet import (Google Sheets CSV export or uploaded .xlsx).
"""
