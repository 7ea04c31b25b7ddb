"""JSONL telemetry logging for rover runs."""
