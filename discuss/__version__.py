"""Package version, shared by the API metadata, health check and telemetry."""

VERSION = "0.1.0"
