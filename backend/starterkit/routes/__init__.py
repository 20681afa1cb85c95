"""
StarterKit Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return JSON responses.
How:   Routers declare paths relative to the API base; `create_app()` mounts
       them under `settings.api_base_url`.

Route Inventory:
    - health.py:     GET  {apiBase}/health
    - users.py:      GET  {apiBase}/users
                     POST {apiBase}/users
    - protected.py:  GET  {apiBase}/protected
    - fallback.py:   *    {apiBase}/*           (404 JSON)
                     GET  /                     (dev banner, non-production)
                     GET  /{path}               (static bundle + SPA fallback, production)

Routes stay thin: they extract input, call a service, and pick the status code.
"""
