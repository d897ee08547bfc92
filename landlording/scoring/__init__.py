"""Vendor performance scoring.

Vetting credentials and recency-weighted landlord reviews are blended
into a single 0-100 performance score with display tiers. The pure
calculators live in ``vetting``, ``reviews`` and ``calculate``; the
``updater`` persists results through a ``ScoreStore``.

Deterministic -- no network calls outside the store.
"""
