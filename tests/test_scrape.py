import httpx
import pytest

from pywaiver.errors import MalformedObservation, ScrapeFailed
from pywaiver.ingest import HtmlTableScrapeSource, extract_table_rows, parse_observation
from pywaiver.models import ValueObservation


RANKINGS_HTML = """
<html><body>
<table>
  <thead><tr><th>Rank</th><th>Player</th><th>Team</th><th>Pos</th><th>PPR</th></tr></thead>
  <tbody>
    <tr><td>1</td><td> Puka Nacua </td><td>LAR</td><td>WR</td><td>18.4</td></tr>
    <tr><td>2</td><td>Jaylen Warren</td><td>PIT</td><td>RB</td><td>1,204.5</td></tr>
    <tr><td>3</td><td></td><td>NYJ</td><td>WR</td><td>9.0</td></tr>
    <tr><td>4</td><td>Tucker Kraft</td><td>GB</td><td>TE</td><td>-</td></tr>
    <tr><td>5</td><td>Short Row</td></tr>
  </tbody>
</table>
</body></html>
"""


def test_extract_table_rows_reads_name_and_value_cells():
    rows = extract_table_rows(RANKINGS_HTML)

    assert rows[0] == {"player": "Puka Nacua", "value": "18.4"}
    assert rows[1] == {"player": "Jaylen Warren", "value": "1,204.5"}
    assert rows[4] == {"player": "Short Row", "value": ""}
    assert len(rows) == 5


def test_extract_table_rows_custom_columns():
    rows = extract_table_rows(RANKINGS_HTML, name_column=1, value_column=2)
    assert rows[0] == {"player": "Puka Nacua", "value": "LAR"}


def test_parse_observation_accepts_numeric_text():
    obs = parse_observation({"player": " Jaylen Warren ", "value": "1,204.5"}, source="src")
    assert obs == ValueObservation(player="Jaylen Warren", value=1204.5, source="src")


@pytest.mark.parametrize(
    "row",
    [
        {"player": "", "value": "9.0"},
        {"player": "Tucker Kraft", "value": "-"},
        {"player": "Tucker Kraft", "value": ""},
        {"player": "Tucker Kraft", "value": "nan"},
        {"value": "3.0"},
        "not a row",
    ],
)
def test_parse_observation_rejects_malformed(row):
    with pytest.raises(MalformedObservation):
        parse_observation(row)


def test_parse_observation_passes_through_models():
    obs = ValueObservation(player="A Back", value=3.0)
    assert parse_observation(obs) is obs


def test_html_source_fetches_page():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=RANKINGS_HTML)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        rows = HtmlTableScrapeSource(client=client).get("https://rankings.example/ppr")

    assert [row["player"] for row in rows][:2] == ["Puka Nacua", "Jaylen Warren"]


def test_html_source_http_error_raises_scrape_failed():
    with httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500))) as client:
        with pytest.raises(ScrapeFailed) as excinfo:
            HtmlTableScrapeSource(client=client).get("https://rankings.example/down")

    assert excinfo.value.source == "https://rankings.example/down"


def test_html_source_page_without_rows_raises_scrape_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html><body><p>No rankings yet</p></body></html>")

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ScrapeFailed):
            HtmlTableScrapeSource(client=client).get("https://rankings.example/empty")


def test_html_source_timeout_raises_scrape_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ScrapeFailed):
            HtmlTableScrapeSource(client=client).get("https://rankings.example/slow")


def test_extract_table_rows_joins_nested_name_markup():
    html = (
        "<table><tbody><tr><td>1</td><td> De<b>Von</b> Achane </td>"
        "<td>MIA</td><td>RB</td><td> 16.2 </td></tr></tbody></table>"
    )
    assert extract_table_rows(html) == [{"player": "DeVon Achane", "value": "16.2"}]


def test_parse_observation_trims_model_rows():
    obs = parse_observation(ValueObservation(player="  DJ Moore ", value=9.0))
    assert obs.player == "DJ Moore"
    assert obs.value == 9.0


def test_parse_observation_rejects_blank_model_rows():
    with pytest.raises(MalformedObservation):
        parse_observation(ValueObservation(player="   ", value=9.0))
