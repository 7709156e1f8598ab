import os
from typing import Optional

# This flag `MAX_LHS_SIZE_FLAG` is used to control the largest left-hand side
# (determinant set) that the discovery engine enumerates. The number of
# candidates grows as O(n^K) in the number of columns n, so values above 3 are
# only practical for narrow tables. The CLI option `--max-lhs-size` overrides it.
MAX_LHS_SIZE_FLAG = int(os.getenv("MINDEP_MAX_LHS_SIZE", "3"))

# This flag `NUM_WORKERS_FLAG` is used to control how many verification queries
# of the same candidate stratum may run concurrently. With a single worker the
# discovery is strictly sequential. Dependencies confirmed inside a stratum are
# always committed before the next, larger stratum starts.
NUM_WORKERS_FLAG = int(os.getenv("MINDEP_NUM_WORKERS", "1"))

# This flag `VERIFIER_FLAG` is used to select the verification formulation:
# - cardinality: compare COUNT(DISTINCT lhs) with COUNT(DISTINCT lhs, rhs)
# - grouping: look for an lhs group with more than one distinct rhs value
VERIFIER_FLAG = os.getenv("MINDEP_VERIFIER", "cardinality").lower()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


# This flag `VERIFY_TIMEOUT_FLAG` is used to bound a single verification query
# in seconds. A query that exceeds the limit is reported as a failed check and
# the discovery continues. If the flag is not specified, no limit applies.
VERIFY_TIMEOUT_FLAG = _optional_float(os.getenv("MINDEP_VERIFY_TIMEOUT"))

# This flag `DATABASE_URL_FLAG` is the default SQLAlchemy database URL used by
# the command line entry point when `--url` is not given.
DATABASE_URL_FLAG = os.getenv("MINDEP_DATABASE_URL")
