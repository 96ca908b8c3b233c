"""
Unit tests for the catalog app.

Test structure:
- test_color_service.py: colour token normalisation and alias table
- test_filename_service.py: image filename parsing
- test_media_service.py: grouping images into galleries
- test_match_service.py: product/image matching
- test_storage_service.py: Supabase and local image listings
- test_index_service.py: image index table and product image sync
- test_sheet_service.py: spreadsheet product import
- test_views.py: JSON report and debug views
- test_commands.py: management commands and Celery tasks
"""
