"""
landchain_registry.api.routers.prediction

AI price prediction endpoint.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx
from fastapi import APIRouter, Depends
from pydantic import Field

from landchain_registry.api.deps import http_dep, settings_dep
from landchain_registry.clients.ai_gateway import AiGatewayClient
from landchain_registry.schemas import CamelModel
from landchain_registry.services.prediction import PredictionService
from landchain_registry.settings import Settings

router = APIRouter(prefix="/api", tags=["prediction"])


class Location(CamelModel):
    village: str = ""
    mandal: str = ""
    district: str = ""


class PredictPriceRequest(CamelModel):
    location: Location
    area: float = Field(gt=0)
    property_type: str = Field(min_length=1)
    historical_data: list[dict[str, Any]] = Field(default_factory=list)


@router.post("/predict-price")
async def predict_price(
    body: PredictPriceRequest,
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(http_dep),
) -> dict[str, Any]:
    svc = PredictionService(client=AiGatewayClient(settings=settings, http=http))
    prediction = await svc.predict(
        location=body.location.model_dump(),
        area=body.area,
        property_type=body.property_type,
        historical_data=body.historical_data,
    )
    return {
        "success": True,
        "prediction": prediction,
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }
