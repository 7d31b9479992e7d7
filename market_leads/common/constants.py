"""Application constants."""

USER_AGENT = "market-leads/1.0 (+market-data; contact: configured-email)"
DATASETS = ("county", "zipcode")
STAGES = (
    "fetch",
    "process",
    "validate",
)
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
ZIP_REGION_PREFIX = "Zip Code: "
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "dataset",
    "source",
    "event",
    "status",
    "lines_read",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
