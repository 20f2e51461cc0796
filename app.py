from __future__ import annotations

from dataclasses import asdict
import math

from flask import Flask, jsonify, request
from pydantic import ValidationError

from realty_toolkit import BlogService, ToolkitConfig
from realty_toolkit.calculator import (
    calculate_investment_metrics,
    generate_cash_flow_projections,
    generate_pro_forma,
)
from realty_toolkit.formatting import format_currency, format_percent
from realty_toolkit.schemas import ProFormaInput, PropertyFinancialsInput, format_errors

app = Flask(__name__)
_blog = BlogService(ToolkitConfig.from_env())


def _jsonable(record) -> dict:
    # DSCR and break-even occupancy can be infinite, which JSON cannot carry.
    return {
        key: None if isinstance(value, float) and math.isinf(value) else value
        for key, value in asdict(record).items()
    }


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


@app.get("/blog-posts")
def blog_posts():
    try:
        posts = _blog.recent_posts(limit=request.args.get("limit"))
        return jsonify({"blogPosts": [_blog.to_dict(post) for post in posts]})
    except Exception as exc:  # pragma: no cover - runtime guard
        app.logger.exception("Uncaught exception when handling /blog-posts")
        return jsonify({"error": "Unexpected server error", "detail": str(exc)}), 500


@app.post("/calculators/pro-forma")
def pro_forma():
    payload = request.get_json(silent=True) or {}
    try:
        inputs = ProFormaInput.model_validate(payload).to_domain()
    except ValidationError as exc:
        return jsonify({"errors": format_errors(exc)}), 400
    outputs = generate_pro_forma(inputs)
    body = _jsonable(outputs)
    body["display"] = {
        "noi": format_currency(outputs.noi),
        "cashFlowAfterDebt": format_currency(outputs.cash_flow_after_debt),
        "capRate": format_percent(outputs.cap_rate),
        "cashOnCashReturn": format_percent(outputs.cash_on_cash_return),
    }
    return jsonify(body)


@app.post("/calculators/projections")
def projections():
    payload = request.get_json(silent=True) or {}
    try:
        financials = PropertyFinancialsInput.model_validate(payload).to_domain()
    except ValidationError as exc:
        return jsonify({"errors": format_errors(exc)}), 400
    return jsonify({"projections": [_jsonable(p) for p in generate_cash_flow_projections(financials)]})


@app.post("/calculators/investment-metrics")
def investment_metrics():
    payload = request.get_json(silent=True) or {}
    try:
        financials = PropertyFinancialsInput.model_validate(payload).to_domain()
    except ValidationError as exc:
        return jsonify({"errors": format_errors(exc)}), 400
    return jsonify(_jsonable(calculate_investment_metrics(financials)))


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=8008)
