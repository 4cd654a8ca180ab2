"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .prediction_orchestrator import PredictionOrchestrator

__all__ = ["PredictionOrchestrator"]
