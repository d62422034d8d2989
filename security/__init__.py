"""
security/ - Access Guards
==========================
Optional whitelist and rate limiting applied to inbound messages.
"""
