"""
Render a form to PDF for manual review.

Without arguments renders the built-in inspection test form with its
answers. Pass a form JSON file to render a stored form instead, with
optional answers and company settings files; --preview fills missing
answers with generated sample data.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

# Add src to path so we can run without installing
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from form_toolkit.builder import BuilderConfig, LayoutError, RenderError, render_form_pdf
from form_toolkit.builder import samples
from form_toolkit.core.models import CompanySettings
from form_toolkit.core.schemas import ValidationError
from form_toolkit.core.utils import load_answers_json, load_form_json

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

OUTPUT_DIR = project_root / "workspace" / "rendered_forms"


def _load_settings(path):
    if path is None:
        return None
    with open(path, "r", encoding="utf-8") as f:
        return CompanySettings.from_dict(json.load(f))


def main():
    parser = argparse.ArgumentParser(description="Render a form to PDF")
    parser.add_argument("form", nargs="?", type=Path, help="Form JSON file (default: built-in test form)")
    parser.add_argument("--answers", type=Path, help="Answers JSON file")
    parser.add_argument("--settings", type=Path, help="Company settings JSON file")
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR, help="Output directory")
    parser.add_argument("--preview", action="store_true", help="Fill unanswered fields with sample data")
    parser.add_argument("--seed", type=int, default=42, help="Seed for sample data")
    parser.add_argument("--submitted-by", default="", help="Submitter name for the header")
    parser.add_argument("--date", type=date.fromisoformat, help="Render date (YYYY-MM-DD)")
    parser.add_argument("--metadata", action="store_true", help="Also write render metadata JSON")
    args = parser.parse_args()

    try:
        if args.form is None:
            form = samples.test_form()
            answers = None if args.preview else samples.test_answers()
        else:
            form = load_form_json(args.form, strict=True)
            answers = load_answers_json(args.answers) if args.answers else None
        settings = _load_settings(args.settings)
    except (OSError, ValidationError, json.JSONDecodeError) as e:
        logger.error(f"[ERROR] Could not load input: {e}")
        return 1

    config = BuilderConfig(
        output_dir=args.output,
        use_sample_data=args.preview,
        sample_seed=args.seed,
        generated_on=args.date,
        submitted_by=args.submitted_by,
        write_metadata=args.metadata,
    )

    try:
        result = render_form_pdf(form, answers, settings, config)
    except (LayoutError, RenderError) as e:
        logger.error(f"[ERROR] Rendering failed: {e}")
        return 1

    for warning in result.warnings:
        logger.info(f"[WARNING] {warning}")
    logger.info(f"[OK] {result.page_count} page(s) written to {result.pdf_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
