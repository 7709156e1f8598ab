import argparse
import sys
from typing import List, Optional

from mindep.dataset.loader import load_csv_source
from mindep.fd.result import DiscoveryResult
from mindep.search import discover_dependencies
from mindep.source.base import AbstractDataSource
from mindep.source.sql import SQLDataSource
from mindep.util.errors import (
    ConfigurationException,
    DataAccessException,
    TableNotFoundException,
)
from mindep.util.flags import (
    DATABASE_URL_FLAG,
    MAX_LHS_SIZE_FLAG,
    NUM_WORKERS_FLAG,
    VERIFIER_FLAG,
    VERIFY_TIMEOUT_FLAG,
)
from mindep.util.logger import get_logger

logger = get_logger(name="mindep.run")


def resolve_table(source: AbstractDataSource, table: Optional[str]) -> str:
    """
    Returns ``table``, or the first table of the source when none is given.

    Raises:
        TableNotFoundException: If no table is given and the source has none.
    """
    if table:
        return table
    tables = source.list_tables()
    if not tables:
        raise TableNotFoundException("No table found in the database")
    logger.info(f"Table detected automatically: {tables[0]}")
    return tables[0]


def run_discovery(
    source: AbstractDataSource,
    table: Optional[str],
    max_lhs_size: int = MAX_LHS_SIZE_FLAG,
    verifier: str = VERIFIER_FLAG,
    num_workers: int = NUM_WORKERS_FLAG,
    timeout: Optional[float] = VERIFY_TIMEOUT_FLAG,
) -> DiscoveryResult:
    table_name = resolve_table(source, table)
    result = discover_dependencies(
        source,
        table_name,
        max_lhs_size=max_lhs_size,
        verifier=verifier,
        num_workers=num_workers,
        timeout=timeout,
    )
    if result.dependencies:
        logger.info(f"Dependencies:{result}")
    logger.info(f"Statistics:\n{result.statistics}")
    for failure in result.failures:
        logger.info(f"Unconfirmed: {failure}")
    return result


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Discover the minimal functional dependencies of a table."
    )
    parser.add_argument(
        "--url",
        "-u",
        type=str,
        default=DATABASE_URL_FLAG,
        help="SQLAlchemy database URL (defaults to $MINDEP_DATABASE_URL)",
    )
    parser.add_argument(
        "--csv",
        "-c",
        type=str,
        help="Path to a CSV file to analyse instead of a database table",
    )
    parser.add_argument(
        "--table",
        "-t",
        type=str,
        help="Name of the table to analyse (defaults to the first table)",
    )
    parser.add_argument(
        "--schema",
        type=str,
        help="Database schema of the table",
    )
    parser.add_argument(
        "--lowercase",
        action="store_true",
        help="Lower-case the table name, as unquoted identifiers are folded by most databases",
    )
    parser.add_argument(
        "--max-lhs-size",
        "-k",
        type=int,
        default=MAX_LHS_SIZE_FLAG,
        help="The largest determinant set to enumerate",
    )
    parser.add_argument(
        "--verifier",
        "-v",
        type=str,
        choices=["cardinality", "grouping"],
        default=VERIFIER_FLAG,
        help="The verification formulation",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=NUM_WORKERS_FLAG,
        help="Number of concurrent verifications within a candidate stratum",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=VERIFY_TIMEOUT_FLAG,
        help="Time limit in seconds for a single verification query",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    table = args.table.lower() if args.table and args.lowercase else args.table

    if not args.csv and not args.url:
        logger.error("Must provide either --csv or --url (or $MINDEP_DATABASE_URL)")
        return 1

    source: Optional[AbstractDataSource] = None
    try:
        if args.csv:
            source, table = load_csv_source(args.csv, table)
        else:
            source = SQLDataSource.from_url(args.url, schema=args.schema)
        run_discovery(
            source,
            table,
            max_lhs_size=args.max_lhs_size,
            verifier=args.verifier,
            num_workers=args.workers,
            timeout=args.timeout,
        )
    except (ConfigurationException, TableNotFoundException, DataAccessException) as e:
        logger.error(f"Error: {e}")
        return 1
    finally:
        if isinstance(source, SQLDataSource):
            source.engine.dispose()
            logger.info("Disconnected from database.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
