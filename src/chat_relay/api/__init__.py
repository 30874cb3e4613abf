"""
Couche HTTP (routers FastAPI).
"""
