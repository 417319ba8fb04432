"""Telemetry for resorter-admin.

- system: Operational logger (console + system.jsonl)
- audit: Authentication audit trail (audit/auth.jsonl)
- models: Pydantic event models shared by the loggers
"""

__all__: list[str] = []
