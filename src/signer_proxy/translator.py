"""
op-node p2p signing request -> web3signer eth_sign request.

The sequencer's signer client only fills ``params.input``; web3signer's
eth_sign takes positional ``[address, data]``. The input is sent as the data.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import MalformedRequest, MissingPayloadField

JSONRPC_VERSION = "2.0"
SIGN_METHOD = "eth_sign"


@dataclass(frozen=True)
class InboundSignRequest:
    jsonrpc: str
    method: str
    address: str
    data: str  # accepted for compatibility, never forwarded
    input: str
    id: int


@dataclass(frozen=True)
class UpstreamSignRequest:
    params: Tuple[str, str]
    id: int
    jsonrpc: str = JSONRPC_VERSION
    method: str = SIGN_METHOD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": list(self.params),
            "id": self.id,
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")


def _str_field(obj: Dict[str, Any], key: str) -> str:
    v = obj.get(key)
    if v is None:
        return ""
    if not isinstance(v, str):
        raise MalformedRequest(f"{key} must be a string")
    return v


def parse_sign_request(raw: bytes) -> InboundSignRequest:
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise MalformedRequest(str(e))
    if not isinstance(body, dict):
        raise MalformedRequest("body must be a JSON object")

    params = body.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise MalformedRequest("params must be an object")

    # id is the only required field besides params.input; bool is an int subclass
    req_id = body.get("id")
    if not isinstance(req_id, int) or isinstance(req_id, bool):
        raise MalformedRequest("id must be an integer")

    inbound = InboundSignRequest(
        jsonrpc=_str_field(body, "jsonrpc"),
        method=_str_field(body, "method"),
        address=_str_field(params, "address"),
        data=_str_field(params, "data"),
        input=_str_field(params, "input"),
        id=req_id,
    )
    if not inbound.input:
        raise MissingPayloadField()
    return inbound


def translate(inbound: InboundSignRequest) -> UpstreamSignRequest:
    return UpstreamSignRequest(params=(inbound.address, inbound.input), id=inbound.id)
