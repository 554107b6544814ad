from flask import Flask, jsonify, request

from backend.config import API_PORT
from backend.tokenomics.engine import compute_tokenomics, validate_custom_tokenomics, evaluate_progress
from backend.tokenomics.deployment import deployment_parameters
from backend.tokenomics.errors import TokenomicsError, TokenomicsConfigError, InvalidMetricsError
from backend.tokenomics.metrics import CreatorMetrics
from backend.tokenomics.policy import get_policy
from backend.tokenomics.record import Tokenomics
from backend.tokenomics.tiers import classify_tier, verification_report, cross_platform_report
from backend.util.log import log_info, log_warn, log_error

app = Flask(__name__)
PORT = API_PORT


def _error_response(exc):
    if isinstance(exc, TokenomicsConfigError):
        log_error(f"[HTTP] Tokenomics configuration error: {exc}")
        return jsonify({"error": str(exc)}), 500
    log_warn(f"[HTTP] Rejected request: {exc}")
    body = {"error": str(exc)}
    for attr in ("field", "index"):
        if getattr(exc, attr, None) is not None:
            body[attr] = getattr(exc, attr)
    return jsonify(body), 400


def _request_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@app.route("/tokenomics/policy")
def route_tokenomics_policy():
    variant = request.args.get("variant")
    try:
        policy = get_policy(variant)
    except TokenomicsError as exc:
        return _error_response(exc)
    return jsonify(policy.to_json())


@app.route("/tokenomics/compute", methods=["POST"])
def route_tokenomics_compute():
    """
    Compute tokenomics for a creator.
    Body: {"metrics": {...}, "tier": "micro" (optional), "variant": "milestone" (optional)}
    Without a tier the creator is classified by follower count.
    """
    body = _request_body()
    try:
        metrics = CreatorMetrics.from_json(body.get("metrics"))
        tier = body.get("tier") or classify_tier(metrics)
        tokenomics = compute_tokenomics(metrics, tier, policy=get_policy(body.get("variant")))
    except TokenomicsError as exc:
        return _error_response(exc)

    return jsonify(tokenomics.to_json())


@app.route("/tokenomics/custom", methods=["POST"])
def route_tokenomics_custom():
    try:
        tokenomics = validate_custom_tokenomics(request.get_json(silent=True))
    except TokenomicsError as exc:
        return _error_response(exc)

    return jsonify(tokenomics.to_json())


@app.route("/tokenomics/progress", methods=["POST"])
def route_tokenomics_progress():
    """
    Body: {"tokenomics": {...stored record...}, "holders_count": 120}
    """
    body = _request_body()
    try:
        tokenomics = Tokenomics.from_json(body.get("tokenomics"))
        progress = evaluate_progress(tokenomics, body.get("holders_count"))
    except TokenomicsError as exc:
        return _error_response(exc)

    log_info(
        f"[HTTP] Progress holders={progress.holders_count} "
        f"current={progress.current_index} percent={progress.progress_percent:.1f}"
    )
    return jsonify(progress.to_json())


@app.route("/tokenomics/deployment", methods=["POST"])
def route_tokenomics_deployment():
    body = _request_body()
    try:
        tokenomics = Tokenomics.from_json(body.get("tokenomics"))
    except TokenomicsError as exc:
        return _error_response(exc)

    return jsonify(deployment_parameters(tokenomics))


@app.route("/tier/verify", methods=["POST"])
def route_tier_verify():
    """
    Body: {"metrics": {...}} for one account, or {"platforms": [{...}, ...]}
    for every linked account of a creator.
    """
    body = _request_body()
    try:
        if "platforms" in body:
            platforms = body["platforms"]
            if not isinstance(platforms, list) or not platforms:
                raise InvalidMetricsError("platforms", platforms, "must be a non-empty list")
            report = cross_platform_report(CreatorMetrics.from_json(entry) for entry in platforms)
        else:
            report = verification_report(CreatorMetrics.from_json(body.get("metrics")))
    except TokenomicsError as exc:
        return _error_response(exc)

    log_info(f"[HTTP] Verification tier={report['tier']} verified={report['verified']}")
    return jsonify(report)


if __name__ == '__main__':
    app.run(port=PORT)
