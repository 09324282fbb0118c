"""
Pet Healthcare API

A FastAPI-based service for a veterinary clinic: pet owners register pets and
book appointments, veterinarians manage the appointments assigned to them, and
administrators see everything.
"""

__version__ = "1.0.0"
