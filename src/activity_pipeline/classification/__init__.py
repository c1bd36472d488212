"""
Activity classification.

This package contains the trained ensemble classifier and the protocol that
any replacement classifier must satisfy.
"""

from .classifier import ActivityClassifier, ClassifierProtocol

__all__ = [
    "ActivityClassifier",
    "ClassifierProtocol",
]
