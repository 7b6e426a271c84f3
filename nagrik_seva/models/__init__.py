"""
Pydantic models for request/response validation.

DESIGN PRINCIPLE:
- Models reflect data structure, not business logic
- JSON uses camelCase keys; snake_case input is accepted too
"""
