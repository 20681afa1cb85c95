# Services package init
"""
StarterKit — Services Layer
=============================

What:  Logic that sits behind the HTTP layer, on both sides of the wire.
How:   Routes call the server-side services; frontend tooling and scripts
       talk to a running server through the client.

Service Inventory:
    - UserService: sample user list and validation/creation of new users (server)
    - ApiService:  typed async client for the HTTP API (client)
"""
