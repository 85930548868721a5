"""
Module: builder.config

Purpose:
    Configuration dataclass for the rendering pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for rendering forms

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main render controller
    - scripts/render_sample_form.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from form_toolkit.builder.layout.config import LayoutConfig


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for rendering forms (immutable).

    Attributes:
        output_dir: Directory PDFs are written to
        layout: Page geometry and typography
        use_sample_data: Fill unanswered fields with generated sample answers
        sample_seed: Seed for generated sample answers
        generated_on: Date printed in the header and file name (today when None)
        submitted_by: Submitter name printed in the header metadata
        show_footer: Draw page footers
        write_metadata: Write a JSON metadata file next to the PDF

    Example:
        >>> config = BuilderConfig(output_dir=Path("output"), use_sample_data=True)
    """

    output_dir: Path = Path("output")
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # Preview
    use_sample_data: bool = False
    sample_seed: int = 42

    # Header metadata
    generated_on: Optional[date] = None
    submitted_by: str = ""

    # Output
    show_footer: bool = True
    write_metadata: bool = False  # Also write <pdf stem>.json with render metadata

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.layout, LayoutConfig):
            raise ValueError(f"layout must be a LayoutConfig: {self.layout!r}")
        if self.sample_seed < 0:
            raise ValueError(f"sample_seed must be non-negative: {self.sample_seed}")

    @property
    def render_date(self) -> date:
        return self.generated_on or date.today()
