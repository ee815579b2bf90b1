"""
Entry point for the education-vs-work opportunity cost calculator.

Usage:
    python main.py                        # launches the web app at localhost:5000
    python main.py --cli                  # runs the terminal interface
    python main.py --cli --share 'a_salary=60000&years=20'
                                          # terminal report from a share string
    python main.py --quick                # single-period net value / ROI comparison
"""

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Opportunity Cost Calculator: Education vs Work",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--share",
        metavar="QUERY",
        default=None,
        help="Load inputs from a share query string instead of prompting (with --cli)",
    )
    parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="Skip writing the PDF report (with --cli)",
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Compare two one-off investments by net value and annualized ROI",
    )
    args = parser.parse_args()

    if args.quick:
        from cli import run_quick_cli
        run_quick_cli()
    elif args.cli or args.share is not None:
        from cli import run_cli
        import config as cfg
        run_cli(query=args.share, pdf_path=None if args.no_pdf else cfg.REPORT_PATH)
    else:
        from app import run_web
        run_web()


if __name__ == "__main__":
    main()
