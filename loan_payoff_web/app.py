"""Flask JSON adapter for the loan payoff calculator.

Loans travel in the shareable reference format (``?loans=Car|8000|3.9|250&...``
with the ``&`` and ``|`` percent-encoded by the client). The most recent
reference built through ``/api/share`` is kept in the Flask session only.
"""

import logging

from flask import Flask, jsonify, request, session

from loan_payoff.config import Settings
from loan_payoff.engine import compare_strategies, compute_schedule
from loan_payoff.errors import LoanPayoffError
from loan_payoff.loan import Loan
from loan_payoff.loan_set import LoanSet
from loan_payoff.logging_config import configure_logging
from loan_payoff.strategy import get_strategy
from loan_payoff.utils import decimal_from_str

settings = Settings.from_env()
configure_logging(settings.log_level, settings.log_json)
logger = logging.getLogger("loan_payoff.web")

app = Flask(__name__)
app.secret_key = settings.secret_key


def _loans_from_args(args) -> LoanSet:
    reference = args.get("loans", "")
    loans = LoanSet.from_serialized_url(reference)
    if not len(loans):
        raise ValueError("Query parameter 'loans' must contain at least one loan")
    return loans


def _days_from_args(args) -> int:
    value = args.get("days")
    if value is None or not value.strip():
        return settings.days_in_period
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid days value: {value}") from exc


def _json_number(value):
    # Form fields may arrive as strings with thousands separators.
    if isinstance(value, str):
        return decimal_from_str(value)
    return value


def _loans_from_json(payload) -> LoanSet:
    if not isinstance(payload, dict) or not isinstance(payload.get("loans"), list):
        raise ValueError("Request body must be a JSON object with a 'loans' list")
    loans = LoanSet()
    for item in payload["loans"]:
        if not isinstance(item, dict):
            raise ValueError("Each loan must be a JSON object")
        try:
            loans.add(
                Loan(
                    item["name"],
                    _json_number(item["amount"]),
                    _json_number(item["interest"]),
                    _json_number(item["payment"]),
                )
            )
        except KeyError as exc:
            raise ValueError(f"Loan is missing field {exc.args[0]!r}") from exc
    return loans


@app.errorhandler(LoanPayoffError)
@app.errorhandler(ValueError)
def handle_bad_input(exc):
    logger.info("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.get("/api/schedule")
def schedule():
    loans = _loans_from_args(request.args)
    strategy = get_strategy(request.args.get("strategy", settings.strategy))
    records, summary = compute_schedule(
        loans, _days_from_args(request.args), strategy, settings.max_periods
    )
    return jsonify({"summary": summary, "schedule": [record.to_dict() for record in records]})


@app.get("/api/compare")
def compare():
    loans = _loans_from_args(request.args)
    summaries = compare_strategies(
        loans, _days_from_args(request.args), max_periods=settings.max_periods
    )
    return jsonify({"summaries": summaries})


@app.post("/api/share")
def share():
    loans = _loans_from_json(request.get_json(silent=True))
    reference = loans.serialize_for_url()
    session["last_reference"] = reference
    return jsonify({"reference": reference, "loans": loans.to_list()})


@app.get("/api/last")
def last_reference():
    return jsonify({"reference": session.get("last_reference")})


if __name__ == "__main__":
    print("Starting Loan Payoff web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
