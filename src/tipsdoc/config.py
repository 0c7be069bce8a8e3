"""Local configuration for tipsdoc."""

from __future__ import annotations

import os


DEFAULT_SQL_DIALECTS = "postgres,mysql,bigquery,snowflake,tsql,duckdb,sqlite"
DEFAULT_LANGUAGE = "sql"
DEFAULT_SQL_LANGUAGES = "sql,postgresql,postgres,mysql,tsql,sqlite,bigquery,snowflake"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SITE_TITLE = "SQL tips"


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip().lower() for part in value.split(",") if part.strip())


# Vendor dialects tried after the generic grammar rejects a snippet.
TIPSDOC_SQL_DIALECTS = _split_csv(os.getenv("TIPSDOC_SQL_DIALECTS", DEFAULT_SQL_DIALECTS))
TIPSDOC_DEFAULT_LANGUAGE = os.getenv("TIPSDOC_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE).strip().lower()
TIPSDOC_SQL_LANGUAGES = _split_csv(os.getenv("TIPSDOC_SQL_LANGUAGES", DEFAULT_SQL_LANGUAGES))
TIPSDOC_LOG_LEVEL = os.getenv("TIPSDOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
TIPSDOC_SITE_TITLE = os.getenv("TIPSDOC_SITE_TITLE", DEFAULT_SITE_TITLE)

TOC_TITLES = ("contents", "table of contents")
