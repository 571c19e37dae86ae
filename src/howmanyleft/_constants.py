"""Internal constants shared across the library."""

DEFAULT_CSV_DIR = "tmp/csv"
DEFAULT_OUTPUT_PATH = "howmanyleft.sqlite3"

# ------------------------------------------------------------------
# Reporting periods
# ------------------------------------------------------------------

# Latest full year in the published tables.  Year-bucketed merges only
# read this column.
CURRENT_FULL_YEAR = "2024"

# The GB-only quarterly tables are superseded by the UK-wide tables from
# this quarter onwards.
GB_CUTOFF_PERIOD = "2014Q3"

# ------------------------------------------------------------------
# Stats buckets
# ------------------------------------------------------------------

UNKNOWN_BUCKET = "Unknown"

# DfT cell markers: ``[x]`` not available, ``[z]`` not applicable.
FLAG_LABELS: frozenset[str] = frozenset({"[x]", "[z]"})

# ------------------------------------------------------------------
# Search index
# ------------------------------------------------------------------

# Tokens must be strictly longer than this to get phonetic codes.
MIN_PHONETIC_LENGTH = 4

METAPHONE_SEPARATOR = "|"
