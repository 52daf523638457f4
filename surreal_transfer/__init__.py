"""
SurrealDB Transfer

Bulk-transfers records between flat files and SurrealDB tables, so that
tables can be seeded or dumped without writing a script per table.

Supports:
- Importing JSON files (one table per file, one bulk insert per file)
- Exporting tables to pretty-printed JSON or schema-projected CSV
- Concurrent per-table export with per-table failure reporting
- JSON run reports
"""

__version__ = "0.1.0"
