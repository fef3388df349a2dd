import json
import logging

from google import genai
from google.genai import types

from rrg_config import INSIGHT_MODEL, get_api_key
from rrg_models import MarketInsight

logger = logging.getLogger(__name__)

INSIGHT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "topSectors": {"type": "ARRAY", "items": {"type": "STRING"}},
        "riskAssessment": {"type": "STRING"},
        "rotationStrategy": {"type": "STRING"},
    },
    "required": ["summary", "topSectors", "riskAssessment", "rotationStrategy"],
}

PROMPT_TEMPLATE = """
Act as a senior quantitative macro strategist. Analyze the following Sector Relative Rotation Graph (RRG) data:

{context}

Provide a professional market commentary including:
1. A concise summary of the current market regime.
2. Identification of the strongest leading sectors.
3. A brief risk assessment of sectors in the weakening or lagging quadrants.
4. A rotation strategy for the next period.

Return the result strictly as a JSON object matching this structure:
{{
  "summary": "string",
  "topSectors": ["string"],
  "riskAssessment": "string",
  "rotationStrategy": "string"
}}
"""


def build_sector_context(series_list):
    lines = []
    for s in series_list:
        last = s.latest
        lines.append(
            f"{s.symbol} ({s.name}): Quadrant={s.current_quadrant.value}, "
            f"RS-Ratio={last.rs_ratio:.2f}, RS-Momentum={last.rs_momentum:.2f}"
        )
    return "\n".join(lines)


def build_prompt(series_list):
    return PROMPT_TEMPLATE.format(context=build_sector_context(series_list))


def parse_insight(text):
    """Parses the model's JSON reply; raises ValueError if a field is missing."""
    payload = json.loads(text.strip())
    missing = [k for k in INSIGHT_SCHEMA["required"] if k not in payload]
    if missing:
        raise ValueError(f"Insight response missing fields: {', '.join(missing)}")
    return MarketInsight(
        summary=str(payload["summary"]),
        top_sectors=tuple(str(s) for s in payload["topSectors"]),
        risk_assessment=str(payload["riskAssessment"]),
        rotation_strategy=str(payload["rotationStrategy"]),
    )


def get_market_insights(series_list, api_key=None, client=None, model=INSIGHT_MODEL):
    """
    Asks Gemini for a structured commentary on the current rotation.
    Returns None when no key is configured, there is no data, or the call fails.
    """
    if not series_list:
        return None
    if client is None:
        api_key = api_key or get_api_key()
        if not api_key:
            logger.info("No Gemini API key configured; skipping market insights")
            return None

    try:
        client = client or genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=model,
            contents=build_prompt(series_list),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=INSIGHT_SCHEMA,
            ),
        )
        if response.text:
            return parse_insight(response.text)
        logger.warning("Gemini returned an empty insight response")
    except Exception as e:
        logger.error(f"Gemini Insight Error: {e}")
    return None
