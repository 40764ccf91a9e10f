"""
Report schema identifiers.

Kept out of the report and tool modules so both can import them without
importing each other.
"""

SCHEMA_VERSION = "v1"

SCHEMA_RESOURCE_PACKAGE = "assetiq.schemas"
SCHEMA_RESOURCE_NAME = f"assetiq_health_report.schema.{SCHEMA_VERSION}.json"
