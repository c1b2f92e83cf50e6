"""HTTP client for the external ML prediction endpoint (POST /predict)"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import httpx

from autovest.config import settings
from autovest.domain.exceptions import PredictionServiceError


@dataclass
class PredictionResult:
    """Black-box verdict returned by the ML engine"""

    decision: str
    confidence: float
    reasoning: List[str] = field(default_factory=list)


class PredictionClient:
    """Client for the hosted investment prediction API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.prediction_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def predict(self, features: Dict[str, Any]) -> PredictionResult:
        """
        Request an invest/hold prediction for a feature vector.

        Expected features: daily_spending, spare_change_total,
        spending_variance, emergency_balance_ratio, market_risk_score,
        user_type.

        Raises:
            PredictionServiceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(f"{self.base_url}/predict", json=features)
                response.raise_for_status()
                data = response.json()

                return PredictionResult(
                    decision=str(data["decision"]),
                    confidence=float(data["confidence"]),
                    reasoning=[str(r) for r in data.get("reasoning", [])],
                )

            except httpx.TimeoutException as e:
                raise PredictionServiceError(f"Prediction API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PredictionServiceError(f"Prediction API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PredictionServiceError(f"Prediction API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise PredictionServiceError(f"Invalid response from prediction API: {e}") from e
