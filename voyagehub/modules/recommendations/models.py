# No tables: recommendations are generated per request by the itinerary backend.
#
# POST {itinerary_api_url}/recommendations
#   body:     {"destination", "type": hotels|food|activities|transport, "budget", "days"[, "members"]}
#   response: {"success": true, "data": "<model text wrapping a JSON array (or object for transport)>"}
#
# Item shapes the model is prompted for:
#   hotels:     name, tier (budget|midrange|luxury), type, rating, price_per_night, area, description, highlights[]
#   food:       name, tier (affordable|midrange|finedining), cuisine, dietary (Veg|Non-Veg|Both),
#               rating, price_per_meal, area, description, must_try[]
#   activities: name, type, rating, description, isUNESCO
#   transport:  {getting_there: [option], getting_around: [option], daily_budget, best_app}
#               option = provider, type, price_range, duration, description, tip, url, cost
