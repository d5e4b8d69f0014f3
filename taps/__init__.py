"""Core (UI-agnostic) TAPS dashboard logic.

This package contains:
- typed spreadsheet cells and sheet reading (XLSX bytes -> rows)
- remote workbook fetching
- series extraction and axis bounds
- the fetch -> parse -> extract pipeline
- chart helpers (Altair -> Vega-Lite spec dict)
"""
