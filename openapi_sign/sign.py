"""
Request signature: MD5(sorted params prefix + canonical body), uppercase hex
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple
import hmac
import logging

from .canonical import canonicalize_body
from .crypto import md5_upper_hex
from .errors import SigningError
from .params import ParameterSet, build_prefix, redacted

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "v1"


def _canonical(params: ParameterSet, body: Any) -> Tuple[str, str]:
    params.validate()
    mapping = params.as_mapping()
    body_text = "" if body is None else canonicalize_body(body)
    return (
        build_prefix(mapping) + body_text,
        build_prefix(redacted(mapping)) + body_text,
    )


def canonical_string(
    method: str,
    version: str,
    appkey: str,
    appsecret: str,
    scope: str,
    scope_value: str,
    body: Any = None,
) -> str:
    """Return the exact string that signature() hashes."""
    params = ParameterSet(method, version, appkey, appsecret, scope, scope_value)
    return _canonical(params, body)[0]


def sign_params(params: ParameterSet, body: Any = None) -> str:
    """
    Sign a request described by a ParameterSet.

    Raises:
        InvalidArgumentError: a required parameter is missing or blank
        SerializationError: body has no JSON form
    """
    text, loggable = _canonical(params, body)
    sig = md5_upper_hex(text)
    logger.debug("signed %s -> %s", loggable, sig)
    return sig


def signature(
    method: str,
    version: str,
    appkey: str,
    appsecret: str,
    scope: str,
    scope_value: str,
    body: Any = None,
) -> str:
    """
    Generate the request signature.

    Args:
        method: API method name
        version: API version
        appkey: Unique identifier of the application
        appsecret: Application secret key
        scope: Permission scope
        scope_value: Permission scope value
        body: Request body; None means the request has no body

    Returns:
        32-char uppercase hex signature
    """
    params = ParameterSet(method, version, appkey, appsecret, scope, scope_value)
    return sign_params(params, body)


def verify_signature(
    expected: str,
    method: str,
    version: str,
    appkey: str,
    appsecret: str,
    scope: str,
    scope_value: str,
    body: Any = None,
) -> Tuple[bool, Optional[str]]:
    """
    Check a signature received from a caller.
    Returns (valid, error_message).
    """
    if not isinstance(expected, str) or len(expected) != 32:
        return False, "Malformed signature"

    try:
        actual = signature(method, version, appkey, appsecret, scope, scope_value, body)
    except SigningError as e:
        return False, str(e)

    if not hmac.compare_digest(actual.encode("ascii"), expected.upper().encode("utf-8", "replace")):
        return False, "Signature mismatch"

    return True, None


@dataclass
class Signer:
    """
    Signs calls for one application.

    Args:
        appkey: Unique identifier of the application
        appsecret: Application secret key
        version: API version used when sign() is not given one
    """

    appkey: str
    appsecret: str
    version: str = DEFAULT_VERSION

    def params(self, method: str, scope: str, scope_value: str, version: Optional[str] = None) -> ParameterSet:
        return ParameterSet(
            method=method,
            version=self.version if version is None else version,
            appkey=self.appkey,
            appsecret=self.appsecret,
            scope=scope,
            scope_value=scope_value,
        )

    def sign(
        self,
        method: str,
        scope: str,
        scope_value: str,
        body: Any = None,
        version: Optional[str] = None,
    ) -> str:
        return sign_params(self.params(method, scope, scope_value, version), body)

    def __repr__(self) -> str:
        return f"Signer(appkey={self.appkey!r}, version={self.version!r})"
