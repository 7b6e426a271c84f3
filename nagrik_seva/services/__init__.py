"""
Services layer - business logic goes here, not in routes.

- issue_store: in-memory records and identity
- lifecycle: status cycling and day simulation
- classifier: keyword-based complaint routing
- area_overview: dashboard statistics
"""
