"""
Snippetbox — Middleware Package
=================================

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [Session] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Logging: access log with status and duration
    3. Session: starsessions reads the session token from the cookie, loads
       the data from the `sessions` table before the handler runs and writes
       it back afterwards (see services/session_store.py)
"""
