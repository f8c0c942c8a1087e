"""Prometheus metrics for remote sync operations."""

from prometheus_client import Counter, Histogram

# operation: fetch|publish, protocol: ftp|sftp, status: success|error
remote_operations_total = Counter(
    "hotfix_remote_operations_total",
    "Total remote fetch/publish operations",
    ["operation", "protocol", "status"]
)

remote_operation_duration_seconds = Histogram(
    "hotfix_remote_operation_duration_seconds",
    "Wall-clock time of remote fetch/publish operations in seconds",
    ["operation", "protocol"],
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0]
)

# outcome: fetched|failed|filtered|symlink (fetch), written|upload_failed (publish)
remote_files_total = Counter(
    "hotfix_remote_files_total",
    "Remote files processed, by outcome",
    ["operation", "outcome"]
)
