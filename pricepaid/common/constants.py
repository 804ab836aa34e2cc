"""Application constants."""

USER_AGENT = "london-pricepaid/0.3 (+research; contact: configured-email)"
STAGES = (
    "fetch",
    "aggregate",
)
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)

# Price Paid Data column positions; the file ships without a header row.
PPD_PRICE_COLUMN = 1
PPD_DURATION_COLUMN = 6
PPD_MIN_COLUMNS = PPD_DURATION_COLUMN + 1
PPD_DATE_FORMAT = "%Y-%m-%d %H:%M"
