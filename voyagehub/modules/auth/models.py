# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Passwordless sign-in with an emailed one-time passcode (OTP)
# - OAuth sign-in (Google) with the PKCE code exchange
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_in_with_otp() - Email a one-time passcode (creates the user on first use)
- auth.verify_otp() - Trade email + passcode for a session
- auth.sign_in_with_oauth() - Build the provider authorization URL
- auth.exchange_code_for_session() - Trade the OAuth callback code for a session
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

The display name lives in user_metadata["display_name"].
"""
