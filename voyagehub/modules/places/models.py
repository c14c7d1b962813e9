# No tables: places are looked up live.
#
# OpenStreetMap Nominatim
#   GET {nominatim_url}/search?q=...&format=json&limit=5&addressdetails=1
#   GET {nominatim_url}/reverse?lat=...&lon=...&format=json
#   Requires a descriptive User-Agent and at most ~1 request/second.
#
# Wikipedia REST
#   GET {wikipedia_summary_url}/{Title_With_Underscores} -> {"extract": "...", ...}
