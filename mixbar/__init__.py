"""x-Music Bar - SABIT vector to cocktail recipe service"""

__version__ = "1.0.0"
