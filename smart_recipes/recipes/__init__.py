"""
Recipe matching engine.

Responsibilities:
- Load the static recipe catalog.
- Normalise typed and recognised ingredients into one set.
- Score and rank catalog recipes against the user's ingredients.
- Suggest recipes similar to the user's favorites.
"""
