"""
handlers/ - Presentation Layer
================================
Update handlers. The router receives updates from the transport,
delegates to the message or button handler, and the handlers send
the response back through the transport.
"""
