import argparse
import os
import sys
from datetime import datetime

import config as cfg
import data_loader
import reports
import outfile_utils.logging as logging
from exceptions import SourceReadError
from outfile_utils.context import parse_context


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize iteration timings of solver outfiles.")
    parser.add_argument("files", nargs="+", help="outfile(s) to parse, processed one after another")
    parser.add_argument("--output-dir", default=None, help="write iteration and summary CSVs into this folder")
    parser.add_argument("--log-dir", default=cfg.SETTINGS.log_dir)
    parser.add_argument("--log-level", default=cfg.SETTINGS.log_level)
    parser.add_argument("--extend-open-blocks", action="store_true",
                        help="close iteration blocks lacking 'Design change:' at the next iteration marker")
    return parser


def format_summary(report) -> str:
    lines = [
        f"{report.source}",
        f"  iterations:      {report.iteration_count()}",
        f"  preparing total: {report.total_time_preparing()}",
        f"  solving total:   {report.total_time_solving()}",
        f"  total:           {report.total_time()}",
    ]
    if report.iteration_count():
        lines.append(f"  average:         {report.average_time()}")
    return "\n".join(lines)


def run_pipeline(argv=None) -> int:
    args = build_parser().parse_args(argv)

    cfg.SETTINGS.update(
        log_dir=args.log_dir,
        log_level=args.log_level,
        extend_open_blocks=args.extend_open_blocks or cfg.SETTINGS.extend_open_blocks,
    )
    logging.setup(log_dir=cfg.SETTINGS.log_dir, level=cfg.SETTINGS.log_level)
    logger = logging.getLogger(__name__)

    all_iteration_rows = []
    all_summary_rows = []
    status = 0

    for path in args.files:
        with parse_context(source=path):
            try:
                report = data_loader.load(path, cfg.SETTINGS)
            except SourceReadError:
                logger.exception("Skipping unreadable outfile %s", path)
                status = 1
                continue
            print(format_summary(report))
            all_iteration_rows.extend(reports.gather_iteration_rows(report))
            all_summary_rows.extend(reports.gather_summary_rows(report))

    if args.output_dir:
        output_folder = os.path.join(args.output_dir, f"outfile_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}")
        os.makedirs(output_folder, exist_ok=True)
        reports.write_iteration_csv(os.path.join(output_folder, "iterations.csv"), all_iteration_rows)
        reports.write_summary_csv(os.path.join(output_folder, "summary.csv"), all_summary_rows)
        logger.info("Reports written to %s", output_folder)

    return status


def main():
    try:
        sys.exit(run_pipeline())
    except Exception:
        logging.getLogger(__name__).exception("Pipeline failed")
        raise

if __name__ == '__main__':
    main()
