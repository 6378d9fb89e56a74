"""
Hotel recommendation package.

Responsibilities:
- Load the point-of-interest and hotel catalogs into immutable records.
- Score and rank hotels against a selection of spots (see ``engine``).
- Assemble API responses with score breakdowns, reasons and analysis.
"""
