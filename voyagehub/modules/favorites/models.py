# Supabase table: favorites
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

favorites:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- destination_id: text (not null) - catalog id as text
- destination_name: text (nullable) - city name, denormalised for listing
- created_at: timestamp (default: now())
- unique constraint on (user_id, destination_id)

Row-level security should restrict rows to auth.uid() = user_id.
"""
