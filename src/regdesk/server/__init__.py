"""ASGI plumbing: request dispatch, response sending, error pages."""
