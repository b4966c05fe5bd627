"""Infrastructure Layer: the Supabase client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All client-library exceptions mapped to core/errors.py types

Design Decisions:
    - One adapter class over the raw client so handlers stay vendor-agnostic
"""
