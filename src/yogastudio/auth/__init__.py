"""Authentication.

Users log in with email/password and receive a signed JWT bearer token.
Every request passes through the auth filter, which turns a valid token
into an AuthContext for the handlers that need one.
"""
