"""
OpenAPI request signing

signature = MD5(sorted key=value& params + canonical JSON body), uppercase hex
"""

from .errors import SigningError, InvalidArgumentError, SerializationError
from .value import (
    normalize,
    json_field,
    JsonValue,
    JsonNull,
    JsonBool,
    JsonNumber,
    JsonString,
    JsonArray,
    JsonObject,
)
from .canonical import canonicalize, canonicalize_bytes, canonicalize_body, escape_string, format_number
from .params import REQUIRED_PARAMS, ParameterSet, build_prefix, is_blank
from .crypto import md5_upper_hex
from .sign import signature, sign_params, canonical_string, verify_signature, Signer

__version__ = "0.1.0"
__all__ = [
    # Errors
    "SigningError",
    "InvalidArgumentError",
    "SerializationError",
    # Value tree
    "normalize",
    "json_field",
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    # Canonical
    "canonicalize",
    "canonicalize_bytes",
    "canonicalize_body",
    "escape_string",
    "format_number",
    # Params
    "REQUIRED_PARAMS",
    "ParameterSet",
    "build_prefix",
    "is_blank",
    # Digest
    "md5_upper_hex",
    # Signing
    "signature",
    "sign_params",
    "canonical_string",
    "verify_signature",
    "Signer",
]
