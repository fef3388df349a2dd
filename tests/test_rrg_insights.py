import json
from types import SimpleNamespace

import pytest

from rrg_insights import build_prompt, build_sector_context, get_market_insights, parse_insight
from rrg_math import build_ticker_series

REPLY = {
    "summary": "Risk-on regime led by growth.",
    "topSectors": ["XLK", "XLC"],
    "riskAssessment": "Defensives are lagging.",
    "rotationStrategy": "Overweight technology, trim utilities.",
}


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.requests = []

    def generate_content(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(text=None, error=None):
    return SimpleNamespace(models=FakeModels(text, error))


@pytest.fixture
def series_list(point):
    return [
        build_ticker_series("XLK", "Technology", [point(100, 100), point(102.3456, 101.5)]),
        build_ticker_series("XLU", "Utilities", [point(100, 100), point(97.5, 98.125)]),
    ]


def test_sector_context_lines(series_list):
    context = build_sector_context(series_list)

    assert context.splitlines() == [
        "XLK (Technology): Quadrant=Leading, RS-Ratio=102.35, RS-Momentum=101.50",
        "XLU (Utilities): Quadrant=Lagging, RS-Ratio=97.50, RS-Momentum=98.12",
    ]
    assert context in build_prompt(series_list)


def test_returns_parsed_insight(series_list):
    client = fake_client(json.dumps(REPLY))

    insight = get_market_insights(series_list, client=client, model="test-model")

    assert insight.summary == REPLY["summary"]
    assert insight.top_sectors == ("XLK", "XLC")
    assert insight.rotation_strategy.startswith("Overweight")
    request = client.models.requests[0]
    assert request["model"] == "test-model"
    assert "XLK (Technology)" in request["contents"]


def test_no_api_key_returns_none(series_list, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    assert get_market_insights(series_list) is None


def test_empty_data_returns_none():
    assert get_market_insights([], client=fake_client(json.dumps(REPLY))) is None


@pytest.mark.parametrize("client", [
    fake_client(error=RuntimeError("quota exceeded")),
    fake_client(text="not json"),
    fake_client(text=json.dumps({"summary": "only"})),
    fake_client(text=""),
])
def test_failures_return_none(series_list, client):
    assert get_market_insights(series_list, client=client) is None


def test_parse_insight_reports_missing_fields():
    with pytest.raises(ValueError, match="riskAssessment"):
        parse_insight(json.dumps({"summary": "s", "topSectors": [], "rotationStrategy": "r"}))
