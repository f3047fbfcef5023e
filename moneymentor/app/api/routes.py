"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from moneymentor.core.challenges import ChallengeRecord, Parsed, parse_challenge
from moneymentor.core.formatting import chart_data, format_currency, format_percentage
from moneymentor.core.growth import InvalidInput, ProjectionResult, project, project_seeded
from moneymentor.core.products import (
    DEPOSIT_FREQUENCY_PRESETS,
    DURATION_PRESETS,
    ProductCatalog,
    UnknownProduct,
    build_params,
)
from moneymentor.schemas.challenge import (
    ChallengeParseResponse,
    ParsedChallengeOut,
    UnparseableOut,
)
from moneymentor.schemas.health import HealthResponse
from moneymentor.schemas.simulation import (
    ProductsResponse,
    SimulationRequest,
    SimulationResponse,
    SimulationSummary,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _catalog() -> ProductCatalog:
    return current_app.extensions["product_catalog"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("Rejected request to %s: %d validation errors", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(UnknownProduct)
def _handle_unknown_product(exc: UnknownProduct):
    logger.info("Unknown product requested: %s", exc.args[0])
    return jsonify({"detail": f"unknown product '{exc.args[0]}'"}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(InvalidInput)
def _handle_invalid_input(exc: InvalidInput):
    logger.info("Invalid simulation input: %s", exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(
        status="ok",
        version=current_app.config["VERSION"],
        products=len(_catalog()),
    )
    return jsonify(response.model_dump())


@api_bp.get("/products")
def products() -> Any:
    """Products with their growth constants, plus the input screen presets."""
    response = ProductsResponse(
        products=_catalog().all(),
        durations=DURATION_PRESETS,
        frequencies=DEPOSIT_FREQUENCY_PRESETS,
    )
    return jsonify(response.model_dump())


def _summary(result: ProjectionResult) -> SimulationSummary:
    return SimulationSummary(
        ideal_final=format_currency(result.ideal.final_amount),
        real_final=format_currency(result.real.final_amount),
        ideal_gain=format_currency(result.ideal.total_gain),
        real_gain=format_currency(result.real.total_gain),
        ideal_return=format_percentage(result.ideal.return_rate),
        real_return=format_percentage(result.real.return_rate),
        lowest_point=format_currency(result.real.worst_day.amount),
        highest_point=format_currency(result.real.best_day.amount),
    )


@api_bp.post("/simulate")
def simulate() -> Any:
    """Ideal vs. realistic growth for one product."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = SimulationRequest.model_validate(raw_payload)
    product = _catalog().get(payload.product_id)

    params = build_params(
        product,
        amount=payload.amount,
        days=payload.days,
        deposit_amount=payload.deposit_amount,
        deposit_interval_days=payload.frequency,
        max_chart_points=payload.max_chart_points or current_app.config["MAX_CHART_POINTS"],
    )
    if payload.seed is not None:
        result = project_seeded(params, payload.seed)
    else:
        result = project(params)

    response = SimulationResponse(
        product=product,
        result=result,
        summary=_summary(result),
        charts={
            "ideal": chart_data(result.ideal.series),
            "realistic": chart_data(result.real.series),
        },
    )
    return jsonify(response.model_dump())


def _record_id(raw: Any) -> str:
    if isinstance(raw, dict) and raw.get("id") is not None:
        return str(raw["id"])
    return ""


def _validation_reason(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}" for error in exc.errors()
    )


@api_bp.post("/challenges/parse")
def parse_challenges() -> Any:
    """Parse one challenge record or a list of them; bad records never sink the batch."""
    raw_payload = request.get_json(force=True, silent=False)
    if isinstance(raw_payload, list):
        raw_records: List[Any] = raw_payload
    elif isinstance(raw_payload, dict):
        raw_records = [raw_payload]
    else:
        return jsonify({"detail": "expected a challenge record or a list of records"}), HTTPStatus.BAD_REQUEST

    parsed: List[ParsedChallengeOut] = []
    unparseable: List[UnparseableOut] = []
    for raw in raw_records:
        try:
            record = ChallengeRecord.model_validate(raw)
        except ValidationError as exc:
            reason = _validation_reason(exc)
            logger.info("Challenge record %r rejected: %s", _record_id(raw), reason)
            unparseable.append(UnparseableOut(id=_record_id(raw), reason=reason))
            continue

        outcome = parse_challenge(record)
        if isinstance(outcome, Parsed):
            challenge = outcome.challenge
            parsed.append(
                ParsedChallengeOut(
                    **challenge.model_dump(),
                    progress=challenge.progress_ratio,
                    days_left=challenge.days_remaining(),
                )
            )
        else:
            logger.info("Challenge %s could not be parsed: %s", outcome.id, outcome.reason)
            unparseable.append(UnparseableOut(id=outcome.id, reason=outcome.reason))

    response = ChallengeParseResponse(challenges=parsed, unparseable=unparseable)
    return jsonify(response.model_dump(mode="json"))
