"""
API Layer
=========

FastAPI application exposing the render pipeline over HTTP.

Components:
- main: Application factory, lifespan and server runner
- routes: The render route
"""
