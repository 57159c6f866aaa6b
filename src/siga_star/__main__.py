"""
Command-line entry point: ``python -m siga_star`` or ``siga-star``.

Takes no flags. Reads the source extract from its fixed location and
writes all star schema tables to the working directory.
"""

import logging
import sys

from .config import EtlConfig
from .pipeline.orchestrator import StarSchemaPipeline


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)-8s %(name)s: %(message)s',
    )
    config = EtlConfig()

    print("=" * 70)
    print("SIGA Star Schema ETL")
    print("=" * 70)
    print(f"Source: {config.source_path}")
    print()

    result = StarSchemaPipeline(config).run()

    if not result.success:
        print(f"\nFatal error, ETL aborted: {result.error}", file=sys.stderr)
        return 1

    print(f"\n{'Table':<24} {'Rows':>12}")
    print("-" * 37)
    for name, rows in result.rows_by_table.items():
        print(f"{name:<24} {rows:>12,}")
    print()
    print(f"Source rows: {result.rows_scanned:,} read, {result.rows_skipped:,} skipped")
    if result.date_range:
        low, high = result.date_range
        print(f"Calendar:    {low.isoformat()} .. {high.isoformat()}")
    else:
        print("Calendar:    skipped (no valid commissioning dates)")

    if result.validation is not None:
        result.validation.print_summary()
        result.validation.print_failures()

    print(f"\nDone in {result.duration_sec:.1f}s. Files written to {config.output_dir}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
