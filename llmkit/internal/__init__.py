"""
Internal helpers shared across providers: string/collection utilities and
the JSON codec.
"""

from llmkit.internal.json_codec import Json, JsonCodec, StandardJsonCodec

__all__ = ["Json", "JsonCodec", "StandardJsonCodec"]
