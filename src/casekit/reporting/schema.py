"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "casekit report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "skipped", "duration_s"],
            "properties": {
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "failed": {"type": "integer"},
                "skipped": {"type": "integer"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["index", "label", "status", "duration_ms"],
                "properties": {
                    "index": {"type": "integer"},
                    "label": {"type": "string"},
                    "status": {"type": "string", "enum": ["passed", "failed", "skipped"]},
                    "duration_ms": {"type": "number"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "failure": {
                        "type": "object",
                        "required": ["kind", "message"],
                        "properties": {
                            "kind": {"type": "string", "enum": ["assertion", "error", "timeout"]},
                            "message": {"type": "string"},
                            "comparison": {"type": ["string", "null"]},
                            "path": {"type": ["string", "null"]},
                            "expected": {"type": "string"},
                            "actual": {"type": "string"},
                            "error_type": {"type": ["string", "null"]},
                            "traceback": {"type": ["string", "null"]},
                        },
                    },
                },
            },
        },
    },
}
