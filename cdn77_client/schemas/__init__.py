"""
API Schemas.

Pydantic models for CDN77 request and response bodies, plus the closed
selector enums whose values are both the accepted CLI choices and the
URL path segments.
"""
