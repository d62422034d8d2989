"""
services/ - Business Logic Layer
=================================
Menu navigation, the shared mode flag and the dispatch context.
Nothing here talks to Telegram directly.
"""
