"""
Core Utilities Package

JSON serialization helpers for form documents and answer maps.
"""

from .serialization import (
    deserialize_answers,
    deserialize_form,
    load_answers_json,
    load_form_json,
    save_answers_json,
    save_form_json,
    serialize_answers,
    serialize_form,
)

__all__ = [
    "deserialize_answers",
    "deserialize_form",
    "load_answers_json",
    "load_form_json",
    "save_answers_json",
    "save_form_json",
    "serialize_answers",
    "serialize_form",
]
