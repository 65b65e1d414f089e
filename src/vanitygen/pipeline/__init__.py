"""
End-to-end generation pipeline.
"""

from .executor import GenerateOptions, GenerationResult, execute

__all__ = ["GenerateOptions", "GenerationResult", "execute"]
