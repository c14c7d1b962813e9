# Destination catalog
# Read-only JSON bundled with the service (voyagehub/data/destinations.json).
# Not stored in Supabase; favorites reference these ids as text.

"""
Expected file structure (list of objects):

- id: int (unique)
- city: text
- country: text
- description: text - fallback when Wikipedia has nothing useful
- rating: float (0-5)
- totalAttractions: int
- attractions: list of
    - name, type, rating, description
    - isUNESCO: bool
    - latitude / longitude: float or null (filled by scripts/fetch_gps.py)
"""
