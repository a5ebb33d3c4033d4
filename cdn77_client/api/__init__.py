"""
CDN77 API Access.

- client.py: authenticated HTTP transport (httpx)
- status.py: per-command and default status code interpretation
- decoding.py: typed response decoding (pydantic)
"""
