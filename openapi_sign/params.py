"""
Signing parameters and the sorted key=value& prefix
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import InvalidArgumentError

REQUIRED_PARAMS = ("method", "version", "appkey", "appsecret", "scope", "scopeValue")

# Characters the counterparty trims before checking for blank values.
# Unlike str.strip() this leaves U+001C..U+001F alone.
WHITESPACE = (
    "\t\n\v\f\r \u0085\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

REDACTED = "******"


def is_blank(value: Any) -> bool:
    """True for None, "" and strings made only of whitespace."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip(WHITESPACE)


@dataclass
class ParameterSet:
    method: str
    version: str
    appkey: str
    appsecret: str
    scope: str
    scope_value: str

    def as_mapping(self) -> Dict[str, str]:
        return {
            "method": self.method,
            "version": self.version,
            "appkey": self.appkey,
            "appsecret": self.appsecret,
            "scope": self.scope,
            "scopeValue": self.scope_value,
        }

    def validate(self) -> None:
        """Raise InvalidArgumentError listing every missing, blank or non-string field."""
        bad = [key for key, value in self.as_mapping().items() if not _is_usable(value)]
        if bad:
            raise InvalidArgumentError(bad)


def _is_usable(value: Any) -> bool:
    if not isinstance(value, str) or is_blank(value):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def build_prefix(params: Mapping[str, str]) -> str:
    """
    Build the key=value& prefix.

    Entries with a blank key or value are dropped, the rest are emitted in
    ascending key order, each followed by '&'.
    """
    keys = sorted(k for k, v in params.items() if not is_blank(k) and not is_blank(v))
    return "".join(f"{k}={params[k]}&" for k in keys)


def redacted(params: Mapping[str, str]) -> Dict[str, str]:
    """Copy of params safe to log."""
    out = dict(params)
    if "appsecret" in out:
        out["appsecret"] = REDACTED
    return out
