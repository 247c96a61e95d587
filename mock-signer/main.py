import hashlib
import os

from flask import Flask, request, jsonify
app = Flask(__name__)

@app.post("/")
def rpc():
    body = request.get_json(silent=True) or {}
    rid = body.get("id")
    if body.get("method") != "eth_sign":
        # web3signer answers JSON-RPC errors with HTTP 200
        return jsonify({"jsonrpc": "2.0", "id": rid,
                        "error": {"code": -32601, "message": "Method not found"}})
    address, data = (list(body.get("params") or []) + ["", ""])[:2]
    digest = hashlib.sha256(f"{address}:{data}".encode("utf-8")).hexdigest()
    return jsonify({"jsonrpc": "2.0", "id": rid, "result": "0x" + digest * 2 + "1b"})

@app.get("/upcheck")
def upcheck():
    return "OK", 200

if __name__ == "__main__":
    app.run("0.0.0.0", int(os.getenv("PORT", "9001")))
