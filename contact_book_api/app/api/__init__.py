"""
API package containing the HTTP routes.

``router.py`` exposes a top‑level ``router`` which includes all of the
domain‑specific endpoint routers.
"""
