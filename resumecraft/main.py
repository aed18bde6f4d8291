import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from resumecraft.config.settings import Settings
from resumecraft.documents.exceptions import DocumentError
from resumecraft.documents.models import SourceFile
from resumecraft.export.exceptions import ExportError
from resumecraft.generation.exceptions import GenerationError
from resumecraft.logging.logger import Log
from resumecraft.processor.exceptions import ProcessorError
from resumecraft.processor.models import ExtractionEvent, PageFailed, ProgressEvent
from resumecraft.session.session import build_session
from resumecraft.state.exceptions import StateError

HANDLED_ERRORS = (DocumentError, StateError, ProcessorError, GenerationError, ExportError)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="resumecraft",
        description="Extract resume text from a PDF with OCR and tailor it with AI.",
    )
    parser.add_argument("resume", type=Path, help="PDF resume to extract")
    parser.add_argument(
        "--job-description",
        type=Path,
        help="text file with the job posting to tailor the resume for",
    )
    parser.add_argument("--insights", action="store_true", help="request job-market insights")
    parser.add_argument("--ats", action="store_true", help="request a detailed ATS report")
    parser.add_argument("--export", type=Path, help="write the tailored resume to this PDF")
    args = parser.parse_args(argv)
    if args.export is not None and args.job_description is None:
        parser.error("--export requires --job-description")
    return args


def _print_progress(event: ExtractionEvent) -> None:
    if isinstance(event, ProgressEvent):
        print(f"\rProcessing PDF {event.percent:3d}%", end="", file=sys.stderr, flush=True)
        if event.percent == 100:
            print(file=sys.stderr)
    elif isinstance(event, PageFailed):
        print(f"\nPage {event.page} skipped: {event.error}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> session -> extract -> optional AI steps."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    with build_session(settings) as session:
        try:
            session.select(SourceFile.from_path(args.resume))
            outcome = session.extract(on_event=_print_progress)
            if not outcome.succeeded:
                print(outcome.text)
                print(f"Error extracting text: {outcome.error}", file=sys.stderr)
                return 1
            print(outcome.text)
            print(f"Credits left: {session.credits}", file=sys.stderr)

            if args.insights:
                session.request_insights()
            if args.ats:
                session.request_ats_insights()
            if args.insights or args.ats:
                print(json.dumps(asdict(session.insights), indent=2))

            if args.job_description is not None and outcome.resume is not None:
                job_description = args.job_description.read_text(encoding="utf-8")
                print(session.tailor(outcome.resume.id, job_description))
                if args.export is not None:
                    path = session.export_tailored(args.export)
                    print(f"Saved {path}", file=sys.stderr)
        except HANDLED_ERRORS as exc:
            Log.error(f"{type(exc).__name__}: {exc}")
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        except OSError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
