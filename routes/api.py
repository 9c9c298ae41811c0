"""
API routes (JSON endpoints).

Handles:
- /api/quote - Cost a print run for the order/checkout flow
- /api/imposition/<format> - Fit analysis of a format on the press sheet
- /health - Health check endpoint
"""

from uuid import uuid4

from flask import Blueprint, current_app, request

from core.exceptions import BookCostingError, CostingConfigError, InvalidRequestError
from logging_config import get_logger, get_quote_logger
from models.costing import PrintJobRequest, ProductionPolicy


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


def _costing_service():
    return current_app.config["COSTING_SERVICE"]


@api_bp.route("/api/quote", methods=["POST"])
def quote():
    """
    Cost a print run.

    Body:
        {
            "quantity": 100,
            "format": "DIN A5",
            "policy": "continuous",
            "pages": {"B": 32, "C": 8},
            "prices": {"B": {"min": 2, "max": 10}, ...},   (optional)
            "fixed_price": {"min": 50, "max": 50},          (optional)
            "markup": 0 | {"min": 75, "max": 200}          (optional)
        }

    Missing `prices` / `fixed_price` are taken from the configured price table.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequestError("Request body must be a JSON object", "body")

    try:
        policy = ProductionPolicy(payload.get("policy", ProductionPolicy.CONTINUOUS.value))
    except ValueError:
        raise InvalidRequestError(
            f"Unknown policy: {payload.get('policy')!r}", "policy"
        ) from None

    price_table = current_app.config.get("PRICE_TABLE")
    if price_table is not None:
        defaults = price_table.to_dict()
        payload = dict(payload)
        payload.setdefault("prices", defaults["classes"])
        if "fixed" in defaults:
            payload.setdefault("fixed_price", defaults["fixed"])

    job_request = PrintJobRequest.from_dict(payload)
    result = _costing_service().compute_cost(job_request, policy)

    quote_logger = get_quote_logger(uuid4().hex)
    quote_logger.info(
        f"Quote: {job_request.requested_quantity} x {job_request.format} "
        f"({policy.value}) -> single {result.per_unit_cost}, total {result.total_cost}"
    )
    return result.to_dict()


@api_bp.route("/api/imposition/<path:page_format>", methods=["GET"])
def imposition(page_format: str):
    """Fit analysis for one page format."""
    analysis = _costing_service().analyze_imposition(page_format)
    return analysis.to_dict()


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {
            "costing_service": "ok" if current_app.config.get("COSTING_SERVICE") else "not_available",
            "price_table": "loaded" if current_app.config.get("PRICE_TABLE") else "not_configured",
        },
    }
    if health_status["checks"]["costing_service"] != "ok":
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


@api_bp.app_errorhandler(BookCostingError)
def handle_costing_error(e: BookCostingError):
    """Translate domain errors into JSON; misconfiguration is a server error."""
    if isinstance(e, CostingConfigError):
        logger.error(f"Costing misconfigured: {e}")
        return e.to_dict(), 500
    logger.warning(f"Rejected request: {e}")
    return e.to_dict(), 400
