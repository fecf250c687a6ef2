"""
Q&A Forum Backend - Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    The request ID is assigned first so the access log line and every log
    record emitted while handling the request can carry it.
"""
