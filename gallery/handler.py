"""
Serverless entry point.

Local dev:
    uvicorn gallery.main:app --reload --port 8888

Function handler (configured in the hosting platform):
    gallery.handler.handler
"""

from mangum import Mangum

from gallery.main import app

# Mangum adapts the ASGI app to API Gateway / function-URL events.
handler = Mangum(app, lifespan="off")
