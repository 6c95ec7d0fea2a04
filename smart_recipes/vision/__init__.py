"""
Image recognition integration.

Responsibilities:
- Manage Clarifai API configuration and credentials.
- Send an uploaded image to the general image recognition model.
- Return the top concept labels as candidate ingredients.
"""
