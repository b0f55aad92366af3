"""Schema Source tests — reading the SDL file and materializing the bundled schema.

Tests cover:
    - Missing file → SchemaLoadError naming the path
    - Bundled schema.graphql loads and materializes without fetching
    - Bundled schema resolves constant, context, and abstract fields
"""

from pathlib import Path

import pytest

from materializer.core.errors import SchemaLoadError
from materializer.infrastructure.schema_source import load_schema_source
from materializer.services.query_executor import QueryExecutor
from materializer.services.schema_builder import build_materialized_schema

BUNDLED_SCHEMA = Path(__file__).resolve().parents[3] / "schema.graphql"


def test_missing_file_raises_schema_load_error(tmp_path):
    missing = tmp_path / "nope.graphql"
    with pytest.raises(SchemaLoadError) as exc_info:
        load_schema_source(missing)
    assert str(missing) in exc_info.value.message


def test_reads_file_text(tmp_path):
    path = tmp_path / "s.graphql"
    path.write_text("type Query { x: Int }", encoding="utf-8")
    assert load_schema_source(path) == "type Query { x: Int }"


def test_bundled_schema_materializes(fetcher):
    materialized = build_materialized_schema(load_schema_source(BUNDLED_SCHEMA), fetcher)
    assert materialized.root_value["units"] == "metric"
    assert materialized.root_value["service"] == "demo"
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_bundled_schema_resolves_static_fields(fetcher):
    executor = QueryExecutor(
        build_materialized_schema(load_schema_source(BUNDLED_SCHEMA), fetcher),
    )
    result = await executor.execute("""{
        forecastDays
        service
        echo(message: "hi")
        places {
            name
            ... on City { population }
            ... on Landmark { height }
        }
    }""")
    assert result == {"data": {
        "forecastDays": 3,
        "service": "demo",
        "echo": "hi",
        "places": [
            {"name": "Berlin", "population": 3645000},
            {"name": "Fernsehturm", "height": 368.0},
        ],
    }}
