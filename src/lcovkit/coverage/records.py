"""LCOV record classification.

Only three directives carry data this package uses:

- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>

Every other LCOV line (TN, FN, FNDA, LF, LH, BRF, BRH, end_of_record, ...)
is classified as Ignored. See geninfo(1) for the full format.
"""

import re

from lcovkit.core.errors import MalformedRecordError
from lcovkit.coverage.models import BranchHit, FileStart, Ignored, LineHit, TraceRecord

SF = "SF:"
DA = "DA:"
BRDA = "BRDA:"

NOT_TAKEN = "-"

_IGNORED = Ignored()

# Optional sign and ASCII digits only: no whitespace, underscores or unicode digits
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_int(token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ValueError(token)
    return int(token)


def branch_key(block: str, branch: str) -> str:
    """Branch identity within a line.

    The block and branch tokens are joined without a separator, which keeps
    keys identical to existing LCOV consumers. Distinct pairs can collide
    when token widths vary (block 1 branch 23 vs block 12 branch 3).
    """
    return block + branch


def parse_record(line: str) -> TraceRecord:
    """Classify one trace line.

    Raises:
        MalformedRecordError: A DA or BRDA field that must be an integer is not.
    """
    line = line.rstrip("\r\n")

    if line.startswith(SF):
        return FileStart(path=line[len(SF) :])
    if line.startswith(DA):
        return _parse_line_hit(line)
    if line.startswith(BRDA):
        return _parse_branch_hit(line)
    return _IGNORED


def _parse_line_hit(line: str) -> LineHit:
    # DA:<line number>,<execution count>[,<checksum>]
    parts = line[len(DA) :].split(",")
    line_token = parts[0]
    if len(parts) < 2:
        raise MalformedRecordError.for_record("DA", line_token, line)
    try:
        line_number = _to_int(line_token)
        count = _to_int(parts[1])
    except ValueError:
        raise MalformedRecordError.for_record("DA", line_token, line) from None
    if count < 0:
        raise MalformedRecordError.for_record("DA", line_token, line)
    return LineHit(line=line_number, count=count)


def _parse_branch_hit(line: str) -> BranchHit:
    # BRDA:<line number>,<block number>,<branch number>,<taken>
    tokens = line[len(BRDA) :].strip().split(",")
    line_token = tokens[0]
    if len(tokens) < 4:
        raise MalformedRecordError.for_record("BRDA", line_token, line)
    taken_token = tokens[3]
    try:
        line_number = _to_int(line_token)
        taken = 0 if taken_token == NOT_TAKEN else _to_int(taken_token)
    except ValueError:
        raise MalformedRecordError.for_record("BRDA", line_token, line) from None
    if taken < 0:
        raise MalformedRecordError.for_record("BRDA", line_token, line)
    return BranchHit(line=line_number, branch_id=branch_key(tokens[1], tokens[2]), taken=taken)
