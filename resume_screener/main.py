"""CLI entry point for the resume screener."""

import argparse
import logging
import sys
from pathlib import Path

from resume_screener.config import AppConfig, load_config, validate_config
from resume_screener.errors import ExternalServiceFailure, InputError, PersistenceError
from resume_screener.extraction.models import ResumeFile
from resume_screener.notifications.email_sender import send_email
from resume_screener.notifications.templates import render_test_email
from resume_screener.screening.pipeline import ScreeningResult
from resume_screener.screening.service import ScreeningService, build_service
from resume_screener.utils.logging_config import setup_logging

logger = logging.getLogger("resume_screener")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resume Screener - rank candidate resumes against a job description",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--jd", metavar="FILE",
        help="Job description text file to screen against",
    )
    parser.add_argument(
        "--resumes", nargs="+", metavar="PDF", default=[],
        help="Resume PDF files to screen",
    )
    parser.add_argument(
        "--stats", action="store_true",
        help="Print candidate statistics and exit",
    )
    parser.add_argument(
        "--export", nargs="?", const="", metavar="PATH",
        help="Write the ranked CSV report (default: timestamped file name)",
    )
    parser.add_argument(
        "--clear", action="store_true",
        help="Delete all stored candidates",
    )
    parser.add_argument(
        "--test-email", metavar="ADDRESS",
        help="Send a test email to ADDRESS and exit",
    )
    parser.add_argument(
        "--serve", action="store_true",
        help="Run the web application",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def load_resumes(paths: list[str]) -> list[ResumeFile]:
    """Read resume files from disk; unreadable paths are reported and skipped."""
    files = []
    for path in paths:
        try:
            files.append(ResumeFile.from_path(path))
        except OSError as e:
            logger.error("Cannot read %s: %s", path, e)
    return files


def print_ranking(result: ScreeningResult, threshold: float):
    print(f"\nRequired skills: {', '.join(result.required_skills) or '(none found)'}")
    if result.is_empty:
        print("No candidates processed.")
    for rank, c in enumerate(result.candidates, 1):
        marker = "*" if c.match_score >= threshold else " "
        print(f"{marker} #{rank} [{c.match_score:5.1f}%] {c.name} <{c.email}> matched: {c.matched_skills or '-'}")
    for skipped in result.skipped:
        print(f"  skipped {skipped.filename}: {skipped.reason}")
    print()


def print_stats(service: ScreeningService):
    stats = service.get_candidate_stats()
    print("\n=== Resume Screener Statistics ===")
    print(f"Total candidates: {stats.total}")
    print(f"Qualified (>= {service.threshold:g}%): {stats.qualified}")
    print(f"Emails sent: {stats.emails_sent}")
    print(f"Average score: {stats.average_score:.1f}%")
    print()


def run_screening(service: ScreeningService, jd_path: str, resume_paths: list[str]) -> int:
    """Screen one batch from the command line. Returns the process exit code."""
    path = Path(jd_path)
    if not path.exists():
        logger.error("Job description file not found: %s", jd_path)
        return 1

    job_description = path.read_text(encoding="utf-8")
    try:
        result = service.process_resumes(job_description, load_resumes(resume_paths))
    except InputError as e:
        logger.error("Invalid input: %s", e)
        return 1
    except (ExternalServiceFailure, PersistenceError) as e:
        logger.error("Screening failed: %s", e)
        return 1

    print_ranking(result, service.threshold)
    return 0


def serve(config: AppConfig, host: str, port: int):
    import uvicorn

    from resume_screener.web.app import create_app

    uvicorn.run(create_app(config), host=host, port=port)


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_dir, config.log_level)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    if args.test_email:
        logger.info("Sending test email...")
        subject, text, html = render_test_email()
        if send_email(config.email, args.test_email, subject, text, html):
            print("Test email sent successfully!")
            return
        print("Failed to send test email. Check logs for details.", file=sys.stderr)
        sys.exit(1)

    if args.serve:
        serve(config, args.host, args.port)
        return

    service = build_service(config)

    if args.clear:
        deleted = service.clear_all_candidates()
        print(f"Deleted {deleted} candidate(s).")

    if args.jd or args.resumes:
        if not args.jd:
            print("Error: --resumes requires --jd", file=sys.stderr)
            sys.exit(2)
        exit_code = run_screening(service, args.jd, args.resumes)
        if exit_code:
            sys.exit(exit_code)

    if args.export is not None:
        filename, content = service.export_csv()
        target = Path(args.export or filename)
        target.write_text(content, encoding="utf-8")
        print(f"CSV report written to {target}")

    if args.stats:
        print_stats(service)


if __name__ == "__main__":
    main()
