
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .api import predict_endpoint
from .api_schemas import PredictRequest, PredictResponse
from .auth import require_predict_key
from .config import SUPPORTED_MODELS
from .monitoring import LoggingMetricsSink, MetricsSink


def create_app(
    metrics: MetricsSink | None = None,
    api_key: str | None = None,
    allowed_origins: list[str] | None = None,
) -> FastAPI:
    app = FastAPI(title="pricecast", version="0.1.0")
    sink = metrics or LoggingMetricsSink()
    app.state.api_key = api_key
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/models")
    def models() -> dict:
        return {"models": list(SUPPORTED_MODELS)}

    @app.post("/predict", response_model=PredictResponse, dependencies=[Depends(require_predict_key)])
    def predict(payload: PredictRequest) -> dict:
        try:
            return predict_endpoint(payload.model_dump(), metrics=sink)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    return app
