"""Tax classification spreadsheet analysis service."""
