"""
Enrichment collaborators.

Responsibilities:
- Current weather for the destination city (OpenWeatherMap).
- Illustrative hotel photos (Pixabay), with a placeholder fallback.
- Direct-distance travel estimates between a spot and a hotel.
- Degrade to "no enrichment" on any failure; never touch scores or ranks.
"""
