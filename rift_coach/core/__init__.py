"""Core domain: analysis, orchestration, ports and observability."""
