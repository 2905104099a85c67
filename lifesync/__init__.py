"""
LifeSync Concierge.

A personal-health companion engine:
- compacts daily wellness logs into a bounded prompt context
- routes a free-text query to one persona (Nutritionist, Trainer, WellnessCoach)
- calls Gemini and parses replies into typed, UI-ready responses
"""

__version__ = "1.0.0"
