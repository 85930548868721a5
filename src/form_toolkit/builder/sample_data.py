"""
Module: builder.sample_data

Purpose:
    Synthesise one plausible answer per field so a form's layout can be
    previewed before real submissions exist.

Key Functions:
    - generate_sample_answers(): Answer map for every field in a tree
    - sample_value(): Sample answer for a single field

Dependencies:
    - random (std): Seeded choice subsets

Used By:
    - builder.controller: Preview rendering
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Sequence

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Block, Field, iter_fields
from form_toolkit.core.models.kinds import FieldKind

SAMPLE_TEXT = "Sample text"
SAMPLE_LONG_TEXT = "This is a longer sample answer used to preview how multi-line text wraps in the value column."
SAMPLE_NUMBER = "42"
SAMPLE_DATE = "2023-05-01"
SAMPLE_SIGNER = "John Doe"

Sampler = Callable[[Field, random.Random], AnswerValue]


def _first_choice(field: Field, rng: random.Random) -> AnswerValue:
    return field.choices[0] if field.choices else SAMPLE_TEXT


def _choice_subset(field: Field, rng: random.Random) -> AnswerValue:
    """Non-empty random subset of the choices, in their original order."""
    if not field.choices:
        return ()
    count = rng.randint(1, len(field.choices))
    picked = sorted(rng.sample(range(len(field.choices)), count))
    return tuple(field.choices[i] for i in picked)


_SAMPLERS: Dict[FieldKind, Sampler] = {
    FieldKind.SHORT_TEXT: lambda f, rng: SAMPLE_TEXT,
    FieldKind.LONG_TEXT: lambda f, rng: SAMPLE_LONG_TEXT,
    FieldKind.NUMBER: lambda f, rng: SAMPLE_NUMBER,
    FieldKind.DATE: lambda f, rng: SAMPLE_DATE,
    FieldKind.BOOLEAN: lambda f, rng: True,
    FieldKind.SINGLE_CHOICE: _first_choice,
    FieldKind.MULTI_CHOICE: _choice_subset,
    FieldKind.DROPDOWN: _first_choice,
    FieldKind.SIGNATURE: lambda f, rng: SAMPLE_SIGNER,
    FieldKind.UNKNOWN: lambda f, rng: SAMPLE_TEXT,
}


def sample_value(field: Field, rng: random.Random) -> AnswerValue:
    return _SAMPLERS[field.kind](field, rng)


def generate_sample_answers(blocks: Sequence[Block], seed: int = 42) -> Dict[str, AnswerValue]:
    """
    Build preview answers for every field under `blocks`.

    Args:
        blocks: Root blocks
        seed: Seed for multi-choice subsets; the same seed gives the
            same answers

    Example:
        >>> answers = generate_sample_answers(form.blocks, seed=1)
        >>> answers[multi_field.id]
        ('A',)
    """
    rng = random.Random(seed)
    return {field.id: sample_value(field, rng) for field in iter_fields(blocks)}
