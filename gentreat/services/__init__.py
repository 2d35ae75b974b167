"""
Application services.
"""
from .treatment import TreatmentService

__all__ = ["TreatmentService"]
