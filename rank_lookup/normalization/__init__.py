"""
Text normalization package for level name processing.

This package provides the normalization, tokenization and version
extraction shared by every matching tier.
"""

from .text_normalizer import TextNormalizer, normalize_text, NORMALIZATION_VERSION

__all__ = [
    'TextNormalizer',
    'normalize_text',
    'NORMALIZATION_VERSION',
]
