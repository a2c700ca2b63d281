"""Basic usage example for OpenAPI request signing."""

import logging
import os
from dataclasses import dataclass

from openapi_sign import SigningError, Signer, json_field, signature


@dataclass
class SignatureBody:
    key_number: str = json_field("keyNumber", default="")
    count: str = json_field("count", default="")
    in_state: str = json_field("inState", default="")
    uuid: str = json_field("uuid", default="")
    tin: str = json_field("tin", default="")


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    method = "baiwang.oversea.invoice.acquireInvoiceNumber"
    version = "v1"
    appkey = os.environ.get("OPENAPI_APPKEY", "appkey")
    appsecret = os.environ.get("OPENAPI_APPSECRET", "appsecret")
    scope = "TAXCODE"
    scope_value = "292221003212"

    print("OpenAPI Sign - Basic Usage Example")
    print("=" * 50)

    print("\n1. One-off signature...")
    try:
        sig = signature(method, version, appkey, appsecret, scope, scope_value, SignatureBody())
    except SigningError as e:
        print(f"   Error generating signature: {e}")
        return
    print(f"   Generated signature: {sig}")

    print("\n2. Reusing a Signer...")
    signer = Signer(appkey=appkey, appsecret=appsecret, version=version)
    body = {"tin": "", "uuid": "", "keyNumber": "", "inState": "", "count": ""}
    print(f"   Dict body signature: {signer.sign(method, scope, scope_value, body)}")
    print(f"   No body signature:   {signer.sign(method, scope, scope_value)}")

    print("\n3. Blank parameter...")
    try:
        signer.sign(method, scope, "  ")
    except SigningError as e:
        print(f"   Rejected: {e}")

    print("\n" + "=" * 50)
    print("Example complete!")


if __name__ == "__main__":
    main()
