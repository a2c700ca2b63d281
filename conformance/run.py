#!/usr/bin/env python3
"""
OpenAPI Sign Conformance Test Suite (Python)
Tests canonical JSON, %g number formatting and full request signatures
"""

import json
import sys
from pathlib import Path

# Import from the repository checkout
sys.path.insert(0, str(Path(__file__).parent.parent))
from openapi_sign import ParameterSet, canonicalize_body, format_number, sign_params


def run_group(name, fixtures, check):
    print(f'[conformance] Testing {name}...')
    ok = 0
    bad = 0
    for v in fixtures:
        try:
            expected, result = check(v)
            if result == expected:
                ok += 1
            else:
                bad += 1
                print(f"  [FAIL] {name}-{v['id']}: expected={expected}, got={result}", file=sys.stderr)
        except Exception as err:
            bad += 1
            print(f"  [FAIL] {name}-{v['id']}: {err}", file=sys.stderr)
    print(f'[conformance] {name}: {ok}/{ok + bad} PASS')
    return ok, bad


def check_canonical(v):
    return v['canonical_output'], canonicalize_body(v['input_json'])


def check_number(v):
    return v['output'], format_number(float(v['input']))


def check_signature(v):
    p = v['params']
    params = ParameterSet(
        method=p['method'],
        version=p['version'],
        appkey=p['appkey'],
        appsecret=p['appsecret'],
        scope=p['scope'],
        scope_value=p['scopeValue'],
    )
    return v['signature'], sign_params(params, v.get('body'))


def main():
    vectors_path = Path(__file__).parent / 'vectors.json'
    with open(vectors_path, encoding='utf-8') as f:
        vectors = json.load(f)

    failed = 0
    for name, key, check in (
        ('canonical_json', 'canonical_json_fixtures', check_canonical),
        ('number_format', 'number_fixtures', check_number),
        ('signature', 'signature_fixtures', check_signature),
    ):
        _, bad = run_group(name, vectors.get(key, []), check)
        failed += bad

    print('')
    if failed == 0:
        print('CONFORMANCE: PASS')
        sys.exit(0)
    else:
        print('CONFORMANCE: FAIL')
        sys.exit(1)


if __name__ == '__main__':
    main()
