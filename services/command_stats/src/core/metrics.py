from shared.metrics import get_counter, get_histogram

SERVICE = "command_stats"

MONITOR_LINES_TOTAL = get_counter(
    "monitor_lines_total", "Raw lines read from the MONITOR feed", SERVICE
)
MONITOR_PARSE_ERRORS_TOTAL = get_counter(
    "monitor_parse_errors_total", "Feed lines that could not be parsed", SERVICE
)
COMMANDS_FILTERED_TOTAL = get_counter(
    "commands_filtered_total", "Events rejected by the command filter", SERVICE
)
COMMANDS_RECORDED_TOTAL = get_counter(
    "commands_recorded_total", "Events counted into a window", SERVICE
)
WINDOW_ROLLOVERS_TOTAL = get_counter(
    "window_rollovers_total", "Windows closed by a rollover", SERVICE
)
STATS_STORE_ERRORS_TOTAL = get_counter(
    "stats_store_errors_total", "Failed stats store operations", SERVICE
)
RECORD_LATENCY_SECONDS = get_histogram(
    "record_latency_seconds",
    "Latency of one stats store record batch",
    SERVICE,
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5],
)
