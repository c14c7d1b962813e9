# Supabase table: Trips
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure (the table name is capitalised):

Trips:
- id: bigint or uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, nullable for legacy rows)
- destination: text (not null)
- days: int (not null)
- itinerary: text or jsonb - raw model output, usually a JSON array of day plans
- budget: int (nullable) - total in-destination budget in USD
- num_people: int (nullable)
- group_type: text (nullable) - Solo | Couple | Family | Friends
- start_date: text (nullable)
- end_date: text (nullable)
- created_at: timestamp (default: now())

Day plan shape inside itinerary:
{"day_number": 1,
 "morning":   {"activity": "...", "description": "...", "cost": "$10"},
 "afternoon": {...},
 "evening":   {...}}
"""
