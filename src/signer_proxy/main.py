import logging
import sys
from typing import Any

from flask import Flask, request
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from .config import Config
from .errors import ConfigError, MalformedRequest, MissingPayloadField, ProxyError, UpstreamUnhealthy, UpstreamUnreachable
from .metrics import SIGN_REQUESTS_TOTAL, HEALTH_CHECKS_TOTAL
from .translator import parse_sign_request, translate
from .upstream import check_upcheck, forward_sign

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_SIGN_ERROR_RESULTS = {
    MalformedRequest: "malformed",
    MissingPayloadField: "missing_input",
}


def create_app(config: Config) -> Flask:
    app = Flask(__name__)

    @app.errorhandler(ProxyError)
    def proxy_error(e: ProxyError) -> Any:
        return e.message, e.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/sign", methods=["POST"])
    def sign() -> Any:
        """
        Body: { "jsonrpc", "method", "params": {"address", "data", "input"}, "id" }
        Response: web3signer's status and JSON-RPC body, unchanged.
        """
        try:
            inbound = parse_sign_request(request.get_data())
        except (MalformedRequest, MissingPayloadField) as e:
            SIGN_REQUESTS_TOTAL.labels(result=_SIGN_ERROR_RESULTS[type(e)]).inc()
            log.warning("rejected sign request: %s", e.detail or e.message)
            raise

        try:
            resp = forward_sign(config, translate(inbound))
        except UpstreamUnreachable:
            SIGN_REQUESTS_TOTAL.labels(result="upstream_unreachable").inc()
            raise

        SIGN_REQUESTS_TOTAL.labels(result="forwarded").inc()
        return app.response_class(resp.body, status=resp.status_code, mimetype="application/json")

    # op-node polls /healthz; web3signer only answers /upcheck
    @app.route("/healthz", methods=["GET"])
    def healthz() -> Any:
        try:
            check_upcheck(config)
        except UpstreamUnhealthy:
            HEALTH_CHECKS_TOTAL.labels(result="unhealthy").inc()
            raise
        HEALTH_CHECKS_TOTAL.labels(result="healthy").inc()
        return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/metrics", methods=["GET"])
    def metrics() -> Any:
        data = generate_latest()
        return app.response_class(data, mimetype=CONTENT_TYPE_LATEST)

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        config = Config.from_env()
    except ConfigError as e:
        log.error("%s", e)
        sys.exit(1)
    logging.getLogger().setLevel(config.log_level)

    log.info("starting web3signer proxy port=%d web3signer_url=%s", config.port, config.upstream_url)
    app = create_app(config)
    app.run(host="0.0.0.0", port=config.port, threaded=True)


if __name__ == "__main__":
    main()
