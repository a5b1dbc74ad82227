from __future__ import annotations

from dataclasses import asdict
import logging
import math
from typing import Any, Dict, List, Literal

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from api.schemas import (
    DefaultsResponse,
    ErrorDetail,
    ErrorResponse,
    PresetModel,
    ShotParametersModel,
    TrajectoryPointModel,
    TrajectoryResultModel,
)
from ballistics.calculator import DEFAULT_STRATEGY, STRATEGIES, calculate
from ballistics.config import CALCULATE_PATH, CORS_ORIGINS, TRAJECTORY_SAMPLES
from ballistics.params import SHOT_DEFAULTS, SHOT_LIMITS, WIND_DIRECTIONS, ShotParameters, normalize_shot
from ballistics.presets import AMMO_PRESETS
from ballistics.trajectory import compute_trajectory


app = FastAPI(title="Armory Ballistics API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

StrategyName = Literal["siacci", "offline"]


def _shot_from_model(model: ShotParametersModel) -> ShotParameters:
    return normalize_shot(model.model_dump())


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with non-finite floats encoded as null."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={float: _safe_float},
        ),
    )


def _camel(model_cls, values: Dict[str, Any]) -> Dict[str, Any]:
    return model_cls(**values).model_dump(by_alias=True)


def _error(status_code: int, message: str, details: List[ErrorDetail] | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
    return _json(body, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append(
            ErrorDetail(
                field=".".join(loc) or "body",
                message=str(err.get("msg", "")),
                type=str(err.get("type", "")),
            )
        )
    logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(details))
    return _error(400, "Invalid request parameters", details)


@app.get("/meta/presets")
def meta_presets():
    return _json({"presets": [_camel(PresetModel, asdict(p)) for p in AMMO_PRESETS]})


@app.get("/meta/defaults")
def meta_defaults():
    defaults = {to_camel(name): value for name, value in SHOT_DEFAULTS.items()}
    limits = {
        to_camel(name): {"min": low, "max": high, "unit": unit} for name, (low, high, unit) in SHOT_LIMITS.items()
    }
    response = DefaultsResponse(defaults=defaults, limits=limits, wind_directions=list(WIND_DIRECTIONS))
    return _json(response.model_dump(by_alias=True))


@app.get("/meta/strategies")
def meta_strategies():
    return _json({"strategies": list(STRATEGIES), "default": DEFAULT_STRATEGY})


@app.post(CALCULATE_PATH)
def calculate_ballistics(
    shot: ShotParametersModel,
    strategy: StrategyName = Query(default=DEFAULT_STRATEGY),
):
    try:
        result = calculate(_shot_from_model(shot), strategy=strategy)
        return _json({"success": True, "data": _camel(TrajectoryResultModel, asdict(result))})
    except Exception:
        logger.exception("calculate_ballistics failed")
        return _error(500, "Failed to calculate ballistics")


@app.post("/api/ballistics/trajectory")
def trajectory(
    shot: ShotParametersModel,
    strategy: StrategyName = Query(default=DEFAULT_STRATEGY),
    samples: int = Query(default=TRAJECTORY_SAMPLES, ge=1, le=200),
):
    try:
        payload = compute_trajectory(_shot_from_model(shot), strategy=strategy, samples=samples)
        payload["result"] = _camel(TrajectoryResultModel, payload["result"])
        payload["points"] = [_camel(TrajectoryPointModel, p) for p in payload["points"]]
        payload["shot"] = _camel(ShotParametersModel, payload["shot"])
        return _json({"success": True, "data": payload})
    except Exception:
        logger.exception("trajectory failed")
        return _error(500, "Failed to calculate trajectory")
