class ConfigError(Exception):
    """Startup misconfiguration. Fatal, the process never serves traffic."""


class ProxyError(Exception):
    """Terminal failure of a single call, rendered as a plain-text response."""

    status_code = 500
    message = "internal error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class MalformedRequest(ProxyError):
    status_code = 400
    message = "invalid JSON"


class MissingPayloadField(ProxyError):
    status_code = 400
    message = "missing input field"


class UpstreamUnreachable(ProxyError):
    status_code = 502
    message = "failed to contact web3signer"


class UpstreamUnhealthy(ProxyError):
    status_code = 503
    message = "unhealthy"
