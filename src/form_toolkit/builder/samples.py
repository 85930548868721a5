"""
Built-in test document.

An aircraft inspection form with answers covering most field kinds,
used to check company branding and layout without a stored form.
"""

from __future__ import annotations

from typing import Dict

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Field, Section
from form_toolkit.core.models.forms import FormDocument, Revision
from form_toolkit.core.models.kinds import FieldKind


def test_form() -> FormDocument:
    """Three-section inspection form with one nested subsection."""
    engine = Section(
        id="section1.1",
        title="Engine Information",
        description="Enter engine details",
        level=2,
        children=(
            Field("field4", "Engine Model", FieldKind.SHORT_TEXT, level=3),
            Field("field5", "Hours Since Overhaul", FieldKind.NUMBER, level=3),
        ),
    )
    basic = Section(
        id="section1",
        title="Basic Information",
        description="Enter basic information about the aircraft",
        level=1,
        children=(
            Field("field1", "Aircraft Registration", FieldKind.SHORT_TEXT, level=2),
            Field("field2", "Aircraft Type", FieldKind.SHORT_TEXT, level=2),
            Field("field3", "Date of Inspection", FieldKind.DATE, level=2),
            engine,
        ),
    )
    inspection = Section(
        id="section2",
        title="Inspection Details",
        description="Record inspection findings",
        level=1,
        children=(
            Field("field6", "Oil Leaks Present", FieldKind.BOOLEAN, level=2),
            Field(
                "field7",
                "Condition",
                FieldKind.SINGLE_CHOICE,
                level=2,
                choices=("Excellent", "Good", "Fair", "Poor"),
            ),
            Field("field8", "Notes", FieldKind.LONG_TEXT, level=2),
        ),
    )
    certification = Section(
        id="section3",
        title="Certification",
        level=1,
        children=(
            Field("field9", "Inspected By", FieldKind.SHORT_TEXT, level=2),
            Field("field10", "Signature", FieldKind.SIGNATURE, level=2),
        ),
    )
    return FormDocument(
        id="test-form",
        title="Test Form",
        description="A sample form for testing PDF generation",
        department="Test Department",
        revision=Revision(1, 0),
        header_on_all_pages=True,
        blocks=(basic, inspection, certification),
    )


def test_answers() -> Dict[str, AnswerValue]:
    return {
        "field1": "OY-ABC",
        "field2": "Cessna 172",
        "field3": "2023-05-01",
        "field4": "Lycoming IO-360",
        "field5": "1250",
        "field6": True,
        "field7": "Good",
        "field8": "Minor oil seepage at cylinder 3. Recommend monitoring.",
        "field9": "John Doe",
        "field10": None,
    }
