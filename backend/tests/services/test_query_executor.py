"""Query Executor tests — end-to-end resolution through graphql-core.

Tests cover:
    - @httpGet + @value(path) scenario resolves 72 as Int
    - Parent → child propagation via default field-name extraction
    - @context reads the root value built from schema directives
    - @arg with literals and variables
    - Interface resolution by "type" tag
    - Coercion failure scoped to its field (partial data + error message)
    - Upstream failure reduced to its message, siblings unaffected
    - Complexity ceiling rejects before any fetch; exact ceiling accepted
    - @httpGet fields selected through an interface charged their flat cost
    - Syntax and validation errors returned as GraphQL errors
    - handle_exception reduces any exception to its message
"""

import pytest

from materializer.core.errors import QueryTooComplexError, UpstreamHttpError
from materializer.services.query_executor import QueryExecutor, handle_exception
from materializer.services.schema_builder import build_materialized_schema
from tests.services.fake_fetcher import FakeFetcher

WEATHER_URL = "https://api.example.com/weather"
FORECAST_URL = "https://api.example.com/forecast"

SDL = f'''
schema @jsonConst(value: """{{"region": "eu", "limits": {{"max": 3}}}}""") {{ query: Query }}

interface Animal {{ name: String }}
type Dog implements Animal {{ name: String barks: Boolean @value(name: "loud") }}
type Cat implements Animal {{ name: String }}

type Forecast {{ day: String high: Float }}

type Query {{
    weather: Int
        @httpGet(url: "{WEATHER_URL}")
        @value(path: "$.current.temp")
    forecast: [Forecast] @httpGet(url: "{FORECAST_URL}")
    region: String @context(name: "region")
    maxItems: Int @context(path: "$.limits.max")
    echo(text: String, times: Int): String @arg(name: "text")
    pets: [Animal] @jsonConst(value: """[
        {{"type": "Dog", "name": "Rex", "loud": "true"}},
        {{"type": "Cat", "name": "Tom"}}
    ]""")
    broken: Int @jsonConst(value: "\\"abc\\"")
    fine: String @const(value: "ok")
}}
'''


def _executor(fetcher: FakeFetcher) -> QueryExecutor:
    return QueryExecutor(build_materialized_schema(SDL, fetcher))


@pytest.fixture
def weather_fetcher():
    return FakeFetcher({
        WEATHER_URL: {"current": {"temp": 72}},
        FORECAST_URL: [{"day": "Mon", "high": "20.5"}, {"day": "Tue", "high": 18}],
    })


@pytest.mark.asyncio
async def test_weather_scenario_resolves_nested_temperature(weather_fetcher):
    result = await _executor(weather_fetcher).execute("{ weather }")
    assert result == {"data": {"weather": 72}}
    assert weather_fetcher.calls == [WEATHER_URL]


@pytest.mark.asyncio
async def test_list_of_objects_from_http_resolves_children(weather_fetcher):
    result = await _executor(weather_fetcher).execute("{ forecast { day high } }")
    assert result["data"]["forecast"] == [
        {"day": "Mon", "high": 20.5}, {"day": "Tue", "high": 18.0},
    ]


@pytest.mark.asyncio
async def test_context_reads_root_value(fetcher):
    result = await _executor(fetcher).execute("{ region maxItems }")
    assert result == {"data": {"region": "eu", "maxItems": 3}}


@pytest.mark.asyncio
async def test_arg_echoes_literal(fetcher):
    result = await _executor(fetcher).execute('{ echo(text: "hi", times: 2) }')
    assert result == {"data": {"echo": "hi"}}


@pytest.mark.asyncio
async def test_arg_echoes_variable(fetcher):
    result = await _executor(fetcher).execute(
        "query Echo($t: String) { echo(text: $t) }", {"t": "yo"}, "Echo",
    )
    assert result == {"data": {"echo": "yo"}}


@pytest.mark.asyncio
async def test_interface_values_resolved_by_type_tag(fetcher):
    result = await _executor(fetcher).execute(
        "{ pets { __typename name ... on Dog { barks } } }",
    )
    assert result == {"data": {"pets": [
        {"__typename": "Dog", "name": "Rex", "barks": True},
        {"__typename": "Cat", "name": "Tom"},
    ]}}


@pytest.mark.asyncio
async def test_coercion_failure_scoped_to_field(fetcher):
    result = await _executor(fetcher).execute("{ fine broken }")
    assert result["data"] == {"fine": "ok", "broken": None}
    assert result["errors"] == [{
        "message": "Invalid int: 'abc'.",
        "locations": [{"line": 1, "column": 8}],
        "path": ["broken"],
    }]


@pytest.mark.asyncio
async def test_upstream_failure_reduced_to_message(fetcher):
    fetcher.respond(WEATHER_URL, UpstreamHttpError(WEATHER_URL, "HTTP 503", 503))
    result = await _executor(fetcher).execute("{ region weather }")
    assert result["data"] == {"region": "eu", "weather": None}
    assert result["errors"][0]["message"] == f"GET {WEATHER_URL} failed: HTTP 503"


@pytest.mark.asyncio
async def test_too_complex_query_rejected_before_fetching(fetcher):
    aliases = " ".join(f"w{i}: weather" for i in range(20))
    result = await _executor(fetcher).execute(f"{{ {aliases} region }}")
    assert "data" not in result
    assert result["errors"] == [{
        "message": (
            "Query complexity is 20001 but max allowed complexity is 20000. "
            "Please reduce the number of the fields in the query."
        ),
    }]
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_query_at_ceiling_executes(weather_fetcher):
    aliases = " ".join(f"w{i}: weather" for i in range(20))
    result = await _executor(weather_fetcher).execute(f"{{ {aliases} }}")
    assert "errors" not in result
    assert len(weather_fetcher.calls) == 20


@pytest.mark.asyncio
async def test_syntax_error_returned_as_error(fetcher):
    result = await _executor(fetcher).execute("{ weather")
    assert "data" not in result
    assert "Syntax Error" in result["errors"][0]["message"]


@pytest.mark.asyncio
async def test_validation_error_returned_as_error(fetcher):
    result = await _executor(fetcher).execute("{ nope }")
    assert "data" not in result
    assert "nope" in result["errors"][0]["message"]


def test_handle_exception_uses_materializer_message():
    error = QueryTooComplexError(30000, 20000)
    assert handle_exception(error) == error.message


def test_handle_exception_reduces_generic_error_to_text():
    assert handle_exception(RuntimeError("connection reset")) == "connection reset"


@pytest.mark.asyncio
async def test_http_fields_selected_through_interface_count_toward_ceiling(fetcher):
    executor = QueryExecutor(build_materialized_schema(f'''
        interface Station {{ reading: Int @httpGet(url: "{WEATHER_URL}") }}
        type Buoy implements Station {{ reading: Int @httpGet(url: "{WEATHER_URL}") }}
        type Query {{ station: Station @jsonConst(value: """{{"type": "Buoy"}}""") }}
    ''', fetcher))
    aliases = " ".join(f"s{i}: station {{ reading }}" for i in range(25))
    result = await executor.execute(f"{{ {aliases} }}")
    assert "data" not in result
    assert result["errors"][0]["message"].startswith("Query complexity is 25025 ")
    assert fetcher.calls == []
