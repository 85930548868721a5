import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import form_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from form_toolkit.core.models import (  # noqa: E402
    CompanySettings,
    Field,
    FieldKind,
    FormDocument,
    Section,
)


# Common test fixtures
@pytest.fixture
def two_section_blocks():
    """[SectionA[FieldX], SectionB[FieldY]]"""
    return (
        Section("A", "Section A", children=(Field("X", "Field X", level=2),)),
        Section("B", "Section B", children=(Field("Y", "Field Y", level=2),)),
    )


@pytest.fixture
def nested_blocks():
    """Three levels of sections with required and optional fields."""
    deepest = Section(
        "s1.1.1",
        "Deep",
        level=3,
        children=(Field("f-deep", "Deep Field", required=True, level=4),),
    )
    middle = Section(
        "s1.1",
        "Middle",
        level=2,
        children=(Field("f-mid", "Middle Field", level=3), deepest),
    )
    return (
        Section(
            "s1",
            "Top",
            children=(
                Field("f-top", "Top Field", required=True, level=2),
                middle,
            ),
        ),
        Section("s2", "Second", children=(Field("f-second", "Second Field", level=2),)),
    )


@pytest.fixture
def simple_form(two_section_blocks):
    return FormDocument(title="Simple Form", blocks=two_section_blocks, id="simple")


@pytest.fixture
def png_logo() -> bytes:
    """Small PNG image as bytes."""
    buf = io.BytesIO()
    Image.new("RGB", (200, 100), color="navy").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def company_settings(png_logo):
    return CompanySettings(
        name="Copenhagen AirTaxi",
        address="Airport Road 1",
        contact="+45 12 34 56 78",
        vat_number="DK12345678",
        approval_number="DK.145.0001",
        legal_text="Confidential - internal use only",
        logo=png_logo,
    )


@pytest.fixture
def long_form():
    """Form with enough fields to span several pages."""
    sections = []
    for s in range(1, 6):
        fields = tuple(
            Field(f"s{s}-f{i}", f"Question {i} of section {s}", FieldKind.LONG_TEXT, level=2)
            for i in range(1, 16)
        )
        sections.append(Section(f"s{s}", f"Section {s}", description="Answer every question.", children=fields))
    return FormDocument(title="Long Form", blocks=tuple(sections), id="long")
