"""
landchain_registry.services.prediction

AI-assisted property price prediction.

Responsibilities:
- Build the valuation prompt from the target parcel and recent registry rates.
- Extract the JSON prediction from the model's reply, falling back to a
  rate-based estimate when the reply cannot be parsed.
"""

from __future__ import annotations

import json
import re
from typing import Any

from landchain_registry.clients.ai_gateway import AiGatewayClient
from landchain_registry.observability.logging import get_logger

log = get_logger(__name__)

FALLBACK_RATE_PER_SQFT = 3500
FALLBACK_RATE_MIN = 3000
FALLBACK_RATE_MAX = 4000
MAX_HISTORY_ROWS = 20

SYSTEM_PROMPT = (
    "You are an AI property valuation expert for land registry in Tirupati, India.\n"
    "Analyze the provided historical transaction data and predict property prices based on "
    "location, area, and property type.\n"
    "Consider market trends, location value, and comparable sales.\n"
    "Provide realistic price predictions in INR with confidence levels."
)

_RESPONSE_SHAPE = """{
  "pricePerSqFt": number,
  "totalPrice": number,
  "priceRange": { "min": number, "max": number },
  "confidence": "low" | "medium" | "high",
  "factors": string[],
  "marketTrend": string,
  "recommendation": string
}"""

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")


def history_context(historical_data: list[dict[str, Any]]) -> str:
    rows = [
        f"Location: {tx.get('VILLAGE', '')}, {tx.get('MANDAL', '')} | "
        f"Unit Rate: ₹{tx.get('UNIT_RATE', '')} | Comm Rate: ₹{tx.get('COMM_RATE', '')} | "
        f"Date: {tx.get('EFFECTIVE_DATE', '')}"
        for tx in historical_data[:MAX_HISTORY_ROWS]
    ]
    return "\n".join(rows) or "No historical data available"


def build_prompt(
    *, location: dict[str, str], area: float, property_type: str, context: str
) -> str:
    return (
        "Based on the following historical transaction data from Tirupati land registry:\n\n"
        f"{context}\n\n"
        "Predict the price for:\n"
        f"- Location: {location.get('village', '')}, {location.get('mandal', '')}, "
        f"{location.get('district', '')}\n"
        f"- Area: {area} sq ft\n"
        f"- Property Type: {property_type}\n\n"
        "Provide:\n"
        "1. Estimated price per sq ft\n"
        "2. Total estimated price\n"
        "3. Price range (min-max)\n"
        "4. Confidence level (low/medium/high)\n"
        "5. Key factors affecting the price\n"
        "6. Market trend analysis\n\n"
        "Return the response in JSON format with these exact fields:\n"
        f"{_RESPONSE_SHAPE}"
    )


def fallback_prediction(area: float) -> dict[str, Any]:
    return {
        "pricePerSqFt": FALLBACK_RATE_PER_SQFT,
        "totalPrice": area * FALLBACK_RATE_PER_SQFT,
        "priceRange": {"min": area * FALLBACK_RATE_MIN, "max": area * FALLBACK_RATE_MAX},
        "confidence": "medium",
        "factors": ["Based on historical data analysis", "Location value assessment"],
        "marketTrend": "Stable market with moderate growth potential",
        "recommendation": "Market analysis based on available data",
    }


def parse_prediction(content: str) -> dict[str, Any] | None:
    match = _FENCED_JSON.search(content)
    candidate = match.group(1) if match else None
    if candidate is None:
        bare = _BARE_OBJECT.search(content)
        candidate = bare.group(0) if bare else content
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class PredictionService:
    def __init__(self, *, client: AiGatewayClient) -> None:
        self._client = client

    async def predict(
        self,
        *,
        location: dict[str, str],
        area: float,
        property_type: str,
        historical_data: list[dict[str, Any]],
    ) -> dict[str, Any]:
        prompt = build_prompt(
            location=location,
            area=area,
            property_type=property_type,
            context=history_context(historical_data),
        )
        content = await self._client.chat(system=SYSTEM_PROMPT, user=prompt)

        prediction = parse_prediction(content)
        if prediction is None:
            log.warning("prediction_unparseable", content=content[:500])
            prediction = fallback_prediction(area)
        return prediction
