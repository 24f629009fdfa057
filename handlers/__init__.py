"""
handlers/ - Presentation Layer
================================
HTTP endpoint handlers. Each handler validates a request, makes a single
repository call, and maps the outcome to a JSON response envelope.
No business logic lives here.
"""
