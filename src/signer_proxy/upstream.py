import logging
import time
from dataclasses import dataclass

import requests

from .config import Config
from .errors import UpstreamUnhealthy, UpstreamUnreachable
from .metrics import UPSTREAM_SIGN_LAT, UPSTREAM_STATUS_TOTAL
from .translator import UpstreamSignRequest

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    body: bytes


def forward_sign(config: Config, req: UpstreamSignRequest) -> UpstreamResponse:
    """Single POST to web3signer. Any HTTP status counts as a completed round trip."""
    t0 = time.time()
    try:
        r = requests.post(
            config.upstream_url,
            data=req.to_json(),
            headers={"Content-Type": "application/json"},
            timeout=config.sign_timeout,
        )
    except requests.RequestException as e:
        log.error("web3signer unreachable at %s: %s", config.upstream_url, e)
        raise UpstreamUnreachable(str(e))
    finally:
        UPSTREAM_SIGN_LAT.observe(time.time() - t0)

    UPSTREAM_STATUS_TOTAL.labels(code=str(r.status_code)).inc()
    return UpstreamResponse(status_code=r.status_code, body=r.content)


def check_upcheck(config: Config) -> None:
    try:
        r = requests.get(config.upcheck_url, timeout=config.health_timeout)
    except requests.RequestException as e:
        log.warning("upcheck failed: %s", e)
        raise UpstreamUnhealthy(str(e))
    if r.status_code != 200:
        log.warning("upcheck returned %d", r.status_code)
        raise UpstreamUnhealthy(f"status {r.status_code}")
