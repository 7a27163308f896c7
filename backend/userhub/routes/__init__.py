# Routes package init
"""
UserHub Backend - API Routes Package
=====================================

Route Inventory:
    - users.py:   /users CRUD endpoints
    - pages.py:   GET /        (HTML landing page)
    - health.py:  GET /health  (service health check)

Routes stay thin: they pull data out of the request, call one service
method and let the global exception handlers shape errors.
"""
