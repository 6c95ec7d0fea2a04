"""
Favorites and ratings ledger.

Responsibilities:
- Provide a small key-value storage interface with a JSON file backend.
- Persist the favorite-id list and the recipe-id -> rating map.
- Serialise read-modify-write cycles so concurrent requests do not lose updates.
"""
