"""POST /v1/predict - proxy to the external ML prediction engine"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from autovest.api.dependencies import get_prediction_client, get_request_id
from autovest.api.v1.schemas import PredictionRequest, PredictionResponse
from autovest.domain.exceptions import PredictionServiceError
from autovest.infrastructure.clients.prediction import PredictionClient
from autovest.infrastructure.observability.metrics import prediction_failures_counter

router = APIRouter()


@router.post("/predict", response_model=PredictionResponse)
async def predict(
    request_body: PredictionRequest,
    request_id: str = Depends(get_request_id),
    client: PredictionClient = Depends(get_prediction_client),
):
    """
    Forward a feature vector to the hosted ML engine.

    The scoring engine never depends on this call; it is a separate,
    timeout-bounded operation.
    """
    try:
        result = await client.predict(request_body.model_dump())
    except PredictionServiceError as e:
        prediction_failures_counter.inc()
        logging.error(f"Prediction API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Prediction service unavailable")

    return PredictionResponse(
        decision=result.decision,
        confidence=result.confidence,
        reasoning=result.reasoning,
    )
